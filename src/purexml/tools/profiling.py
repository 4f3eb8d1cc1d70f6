"""Performance profiling for purexml parse calls.

Measures wall-clock time and process memory (resident set size, via
``psutil``) around each parse and summarizes the sessions in a report.
"""

import time
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

import psutil

from purexml.api.parser import PureXMLParser
from purexml.shared.config import ParserConfig
from purexml.shared.logging import get_logger
from purexml.tree.model import XMLDocument


@dataclass
class ProfilingSession:
    """Measurements for one profiled parse."""

    session_id: str
    start_time: float
    end_time: float = 0.0
    input_size: int = 0  # characters
    memory_start: int = 0  # bytes
    memory_end: int = 0  # bytes
    element_count: int = 0
    succeeded: bool = False
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def duration_ms(self) -> float:
        """Processing duration in milliseconds."""
        return (self.end_time - self.start_time) * 1000

    @property
    def memory_delta(self) -> int:
        """Memory usage change in bytes."""
        return self.memory_end - self.memory_start

    @property
    def characters_per_second(self) -> float:
        """Parse throughput in characters per second."""
        duration_s = self.end_time - self.start_time
        if duration_s <= 0:
            return 0.0
        return self.input_size / duration_s

    def to_dict(self) -> Dict[str, Any]:
        """Convert session to dictionary representation."""
        return {
            "session_id": self.session_id,
            "duration_ms": self.duration_ms,
            "input_size": self.input_size,
            "memory_delta_bytes": self.memory_delta,
            "element_count": self.element_count,
            "succeeded": self.succeeded,
            "characters_per_second": self.characters_per_second,
            **self.metadata,
        }


@dataclass
class PerformanceReport:
    """Summary over a set of profiling sessions."""

    sessions: List[ProfilingSession]
    generation_time: float

    @property
    def session_count(self) -> int:
        """Total number of profiled sessions."""
        return len(self.sessions)

    @property
    def average_duration_ms(self) -> float:
        """Average processing duration across sessions."""
        if not self.sessions:
            return 0.0
        return sum(s.duration_ms for s in self.sessions) / len(self.sessions)

    @property
    def peak_memory_delta(self) -> int:
        """Largest memory growth seen in a single session."""
        return max((s.memory_delta for s in self.sessions), default=0)

    def to_dict(self) -> Dict[str, Any]:
        """Convert report to dictionary representation."""
        return {
            "session_count": self.session_count,
            "average_duration_ms": self.average_duration_ms,
            "peak_memory_delta_bytes": self.peak_memory_delta,
            "sessions": [s.to_dict() for s in self.sessions],
        }


class PerformanceProfiler:
    """Profiles parse calls for timing and memory use.

    Examples:
        >>> profiler = PerformanceProfiler()
        >>> document = profiler.profile_parse("<root><a/></root>")
        >>> profiler.generate_report().session_count
        1
    """

    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        enable_memory_tracking: bool = True
    ) -> None:
        """Initialize performance profiler.

        Args:
            config: Parser configuration used for profiled parses
            enable_memory_tracking: Whether to sample process memory
        """
        self.enable_memory_tracking = enable_memory_tracking
        self.parser = PureXMLParser(config)
        self.sessions: List[ProfilingSession] = []
        self.logger = get_logger(__name__, None, "performance_profiler")
        self._process = psutil.Process() if enable_memory_tracking else None

    def _memory_usage(self) -> int:
        if self._process is None:
            return 0
        return self._process.memory_info().rss

    @contextmanager
    def profile(
        self, session_id: Optional[str] = None, input_size: int = 0
    ) -> Iterator[ProfilingSession]:
        """Profile the enclosed block as one session."""
        session = ProfilingSession(
            session_id=session_id or uuid.uuid4().hex[:8],
            start_time=time.time(),
            input_size=input_size,
            memory_start=self._memory_usage(),
        )
        try:
            yield session
        finally:
            session.end_time = time.time()
            session.memory_end = self._memory_usage()
            self.sessions.append(session)
            self.logger.debug(
                "Profiling session finished",
                extra={
                    "session_id": session.session_id,
                    "duration_ms": session.duration_ms,
                    "memory_delta": session.memory_delta,
                }
            )

    def profile_parse(self, text: str, session_id: Optional[str] = None) -> XMLDocument:
        """Parse ``text`` inside a profiling session.

        Raises:
            XMLParseError: Propagated from the parser; the session is kept
        """
        with self.profile(session_id, input_size=len(text)) as session:
            document = self.parser.parse(text)
            session.element_count = document.element_count
            session.succeeded = True
        return document

    def generate_report(self) -> PerformanceReport:
        """Summarize all sessions recorded so far."""
        return PerformanceReport(sessions=list(self.sessions), generation_time=time.time())

    def clear(self) -> None:
        """Forget recorded sessions."""
        self.sessions.clear()
