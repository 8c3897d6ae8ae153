from abc import ABC, abstractmethod
from dataclasses import dataclass

from ..models.news import NewsStatus


@dataclass
class Verdict:
    status: str
    explanation: str


class VerdictParser(ABC):
    """Turns a raw model completion into a verdict."""

    @abstractmethod
    def parse(self, completion: str) -> Verdict:
        pass


class KeywordVerdictParser(VerdictParser):
    """
    Free-text keyword scan. "TRUE"/"true" wins over "FALSE"/"false";
    anything else is uncertain. The whole completion is kept as the explanation.
    """

    def parse(self, completion: str) -> Verdict:
        text = completion or ""

        if "TRUE" in text or "true" in text:
            status = NewsStatus.TRUE.value
        elif "FALSE" in text or "false" in text:
            status = NewsStatus.FALSE.value
        else:
            status = NewsStatus.UNCERTAIN.value

        return Verdict(status=status, explanation=text.rstrip())
