from dataclasses import dataclass, field
from typing import Optional

PATH_SEP = b";"


@dataclass(frozen=True)
class Frame:
    name: str
    entry_time: float
    restore_point: int


@dataclass
class CallStack:
    """The active calls, innermost last, together with their joined path.

    The path buffer always holds the semicolon join of all active frame names, root first. Every frame remembers the
    buffer length from before its name was appended, so popping only has to truncate the buffer:

        push("{main}")  -> "{main}"         restore point 0
        push("a")       -> "{main};a"       restore point 6
        pop()           -> "{main}"         truncated back to 6
    """
    frames: list[Frame] = field(default_factory=list)
    _path: bytearray = field(default_factory=bytearray, repr=False)

    def push(self, name: str, entry_time: float):
        restore_point = len(self._path)
        if self.frames:
            self._path += PATH_SEP
        self._path += name.encode("utf-8")
        self.frames.append(Frame(name, entry_time, restore_point))

    def pop(self, exit_time: float) -> Optional[tuple[str, float]]:
        """Completes the innermost call.

        :return: the joined path of the completed call and its duration, or None when no call is active
        """
        if not self.frames:
            return None

        frame = self.frames.pop()
        path = self._path.decode("utf-8")
        del self._path[frame.restore_point:]
        return path, exit_time - frame.entry_time

    @property
    def path(self) -> str:
        return self._path.decode("utf-8")

    @property
    def depth(self) -> int:
        return len(self.frames)

    def __len__(self):
        return len(self.frames)
