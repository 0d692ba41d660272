"""Ordered tool capability probing"""
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence

from toolshim.infrastructure.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ToolCandidate:
    """One strategy for a pipeline stage: how to probe it and how to run it"""
    name: str
    probe_argv: List[str]
    command_argv: Callable[[str], List[str]]


class ToolProber:
    """Picks the first candidate whose probe command succeeds

    With cache enabled a selection is remembered per candidate-set name for
    the lifetime of the prober; otherwise every call probes again.
    """

    def __init__(self, run_probe: Callable[[List[str]], bool], cache: bool = True):
        """
        Args:
            run_probe: Runs a probe argv quietly, returning its success
            cache: Remember selections
        """
        self.run_probe = run_probe
        self.cache = cache
        self._selected: Dict[str, Optional[ToolCandidate]] = {}

    def select(self, purpose: str, candidates: Sequence[ToolCandidate]) -> Optional[ToolCandidate]:
        if self.cache and purpose in self._selected:
            return self._selected[purpose]

        chosen = None
        for candidate in candidates:
            if self.run_probe(candidate.probe_argv):
                chosen = candidate
                break
            logger.debug("tool_probe_failed", purpose=purpose, candidate=candidate.name)

        if chosen is None:
            logger.warning(
                "tool_probe_exhausted",
                purpose=purpose,
                candidates=[c.name for c in candidates],
            )
        else:
            logger.debug("tool_probe_selected", purpose=purpose, candidate=chosen.name)

        if self.cache:
            self._selected[purpose] = chosen

        return chosen

    def forget(self, purpose: Optional[str] = None) -> None:
        """Drop cached selections (all of them when purpose is None)"""
        if purpose is None:
            self._selected.clear()
        else:
            self._selected.pop(purpose, None)
