"""DependencySpecLoader — parse the ``deps.json`` specification list.

Input is a JSON array of ``{"path", "handler", "ns"}`` records, either read
from a file or passed inline. Output order is input order; canonical
ordering happens later, in the change detector.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from routergen.domain.errors import FileAccessError, FormatError
from routergen.domain.models import DependencySpec
from routergen.services.base import BaseStage

_SPEC_LIST = TypeAdapter(list[DependencySpec])


@dataclass(frozen=True)
class SpecSource:
    """Where the dependency list text comes from.

    ``base_dir`` anchors relative dependency paths: the list file's own
    directory, or the working directory for inline text.
    """

    base_dir: Path
    path: Path | None = None
    text: str | None = None

    @classmethod
    def from_file(cls, path: Path) -> SpecSource:
        return cls(base_dir=path.parent, path=path)

    @classmethod
    def inline(cls, text: str, base_dir: Path | None = None) -> SpecSource:
        return cls(base_dir=base_dir or Path.cwd(), text=text)

    @property
    def label(self) -> str:
        return str(self.path) if self.path is not None else "<inline>"


def summarize_validation_error(exc: ValidationError) -> list[dict[str, str]]:
    """Flatten pydantic errors into JSON-safe ``{"loc", "msg"}`` pairs."""
    return [
        {"loc": ".".join(str(part) for part in err["loc"]), "msg": err["msg"]}
        for err in exc.errors()
    ]


def parse_specs(text: str, *, source: str = "<inline>") -> list[DependencySpec]:
    """Parse a JSON array of dependency records, preserving order.

    Raises:
        FormatError: malformed JSON, wrong shape, or an invalid field.
    """
    try:
        return _SPEC_LIST.validate_json(text)
    except ValidationError as exc:
        errors = summarize_validation_error(exc)
        msg = f"Invalid dependency specification in {source}: {errors[0]['msg']}"
        raise FormatError(msg, detail={"source": source, "errors": errors}) from exc


class DependencySpecLoader(BaseStage):
    """Reads a :class:`SpecSource` into an ordered list of specs."""

    stage_name = "load"

    def load(self, source: SpecSource) -> list[DependencySpec]:
        if source.text is not None:
            text = source.text
        else:
            assert source.path is not None
            try:
                text = source.path.read_text(encoding="utf-8")
            except OSError as exc:
                msg = f"Cannot read dependency specification {source.path}: {exc.strerror or exc}"
                raise FileAccessError(msg, detail={"path": str(source.path)}) from exc
            except UnicodeDecodeError as exc:
                msg = f"Invalid dependency specification in {source.label}: not valid UTF-8"
                raise FormatError(
                    msg, detail={"source": source.label, "reason": exc.reason, "offset": exc.start}
                ) from exc

        specs = parse_specs(text, source=source.label)
        self._log.debug("specs loaded", source=source.label, count=len(specs))
        return specs
