"""
Mirror sinks: best-effort copies of a resource file to a remote host after a save.
A sink exposes one method, publish(path, message). Failures are logged and never
reach the HTTP caller.
"""

import threading
from abc import ABC, abstractmethod
from pathlib import Path


class MirrorSink(ABC):
    """Interface for sinks that push the file at `path` somewhere with a commit message."""

    @abstractmethod
    def publish(self, path: Path, message: str) -> None:
        ...


class NullMirror(MirrorSink):
    """Default sink when no remote is configured."""

    def publish(self, path: Path, message: str) -> None:
        return None


def publish_safely(sink: MirrorSink, path: Path, message: str) -> bool:
    """Run sink.publish; log and swallow any failure. Returns True on success."""
    try:
        sink.publish(path, message)
        return True
    except Exception as e:
        print(f"[Mirror] Publish failed for {Path(path).name}: {e}")
        return False


def publish_in_background(sink: MirrorSink, path: Path, message: str) -> threading.Thread:
    """Fire-and-forget publish on a daemon thread."""
    t = threading.Thread(target=publish_safely, args=(sink, path, message), daemon=True)
    t.start()
    return t
