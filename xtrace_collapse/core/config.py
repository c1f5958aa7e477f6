from dataclasses import dataclass

DEFAULT_MAX_LINE_LENGTH = 4096


@dataclass(frozen=True)
class CollapseOptions:
    max_line_length: int = DEFAULT_MAX_LINE_LENGTH
    strip_stray_prefix: bool = True

    def __post_init__(self):
        if self.max_line_length < 1:
            raise ValueError(f"max_line_length must be positive, got {self.max_line_length}")
