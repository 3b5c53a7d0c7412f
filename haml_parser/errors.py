"""Haml parser error types with source location info."""


class HamlError(Exception):
    def __init__(self, message: str, lineno: int = 0, filename: str | None = None):
        self.message = message
        self.lineno = lineno
        self.filename = filename
        super().__init__(self._format())

    def _format(self) -> str:
        if self.filename:
            return f"{self.filename}:{self.lineno}: {self.message}"
        return f"Line {self.lineno}: {self.message}"

    def attach_filename(self, filename: str) -> None:
        """Record the source file and refresh the formatted message."""
        self.filename = filename
        self.args = (self._format(),)


class HamlSyntaxError(HamlError):
    pass


class IndentError(HamlSyntaxError):
    pass


class HamlConfigError(Exception):
    """Invalid haml_parser.config contents."""
    pass
