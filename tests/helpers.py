from dataclasses import dataclass
from enum import StrEnum

from pydantic import BaseModel


class Color(StrEnum):
    RED = "red"
    BLUE = "blue"


class Point(BaseModel):
    x: int
    y: int
    label: str = ""


class Route(BaseModel):
    name: str
    points: list[Point]
    origin: Point | None = None
    color: Color = Color.RED


@dataclass
class Sample:
    sensor: str
    values: list[float]
    tags: dict[str, str]


@dataclass
class Batch:
    samples: list[Sample]
    sequence: int


class BrokenFormat:
    """Value format whose byte source fails, for I/O error propagation."""
    name = "broken"
    self_describe_marker = None

    def load(self, fp):
        fp.read(1)
        raise OSError("device unplugged")

    def dump(self, value, fp):
        fp.write(b"\x00")
        raise OSError("device unplugged")
