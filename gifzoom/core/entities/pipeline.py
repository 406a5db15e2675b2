"""PipelineDescription - ordered, labelled processing stages for the frame engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class PipelineShape(str, Enum):
    SIMPLE = "simple"
    TWO_PART = "two_part"
    THREE_PART = "three_part"


def format_value(value: Any) -> str:
    """Render a stage parameter the way the filter-graph syntax expects it."""
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return str(value)


@dataclass(frozen=True)
class Stage:
    """One filter invocation with explicit input and output stream labels."""

    operation: str
    inputs: tuple[str, ...]
    outputs: tuple[str, ...]
    args: tuple[Any, ...] = ()
    params: dict = field(default_factory=dict)

    def render(self) -> str:
        parts = [format_value(a) for a in self.args]
        parts.extend(f"{key}={format_value(value)}" for key, value in self.params.items())
        if not parts:
            return self.operation
        return f"{self.operation}={':'.join(parts)}"


@dataclass(frozen=True)
class StreamInput:
    label: str
    role: str


@dataclass(frozen=True)
class OutputSpec:
    label: str = "out"
    container: str = "gif"
    loop: int = 0


@dataclass(frozen=True)
class Segment:
    """A slice of the source timeline that ends up in the output."""

    start: float
    end: float
    cropped: bool = False

    @property
    def duration(self) -> float:
        return self.end - self.start


@dataclass(frozen=True)
class PipelineDescription:
    """Compiled processing plan for one export. Consumed once, never persisted."""

    shape: PipelineShape
    stages: tuple[Stage, ...]
    inputs: tuple[StreamInput, ...]
    output: OutputSpec
    segments: tuple[Segment, ...]
    video_width: int
    video_height: int
    width: int
    height: int

    @property
    def duration(self) -> float:
        return sum(s.duration for s in self.segments)

    @property
    def operations(self) -> list[str]:
        return [s.operation for s in self.stages]

    @property
    def has_mask(self) -> bool:
        return any(i.role == "mask" for i in self.inputs)

    def stages_named(self, operation: str) -> list[Stage]:
        return [s for s in self.stages if s.operation == operation]

    def index_of(self, operation: str) -> int:
        return self.operations.index(operation)

    def to_filter_graph(self) -> str:
        """Render the stages as an ffmpeg ``-filter_complex`` string.

        Linear runs of stages are joined with commas and their intermediate
        labels dropped; everything else is spelled out with explicit labels.
        """
        consumers: dict[str, int] = {}
        for stage in self.stages:
            for label in stage.inputs:
                consumers[label] = consumers.get(label, 0) + 1

        chains: list[str] = []
        current = ""
        previous: Stage | None = None
        for stage in self.stages:
            continues = (
                previous is not None
                and len(previous.outputs) == 1
                and stage.inputs == previous.outputs
                and consumers.get(previous.outputs[0], 0) == 1
            )
            if continues:
                current += "," + stage.render()
            else:
                if previous is not None:
                    chains.append(current + _labels(previous.outputs))
                current = _labels(stage.inputs) + stage.render()
            previous = stage
        if previous is not None:
            chains.append(current + _labels(previous.outputs))
        return ";".join(chains)

    def to_dict(self) -> dict:
        return {
            "shape": self.shape.value,
            "inputs": [{"label": i.label, "role": i.role} for i in self.inputs],
            "stages": [
                {
                    "operation": s.operation,
                    "inputs": list(s.inputs),
                    "outputs": list(s.outputs),
                    "args": list(s.args),
                    "params": dict(s.params),
                }
                for s in self.stages
            ],
            "output": {
                "label": self.output.label,
                "container": self.output.container,
                "loop": self.output.loop,
            },
            "segments": [
                {"start": s.start, "end": s.end, "cropped": s.cropped} for s in self.segments
            ],
            "width": self.width,
            "height": self.height,
            "duration": self.duration,
            "filter_graph": self.to_filter_graph(),
        }


def _labels(labels: tuple[str, ...]) -> str:
    return "".join(f"[{label}]" for label in labels)
