from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from medrecords.extraction.models import Examination
from medrecords.processor.models import RawFile


@dataclass(slots=True)
class PipelineContext:
    result_id: str
    raw_file: RawFile
    payload: str = ""
    examinations: list[Examination] = field(default_factory=list)


class PipelineStep(ABC):
    @abstractmethod
    async def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
