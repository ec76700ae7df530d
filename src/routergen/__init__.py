"""routergen — generate and rebuild a namespaced Neovim RPC router binary."""

__version__ = "0.1.0"
