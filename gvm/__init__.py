"""gvm - generic version manager for language toolchains."""

__version__ = "0.3.0"
