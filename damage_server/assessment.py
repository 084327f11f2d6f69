"""Placeholder damage assessment.

No model is called: every image is reported as damaged with one fixed
detection box.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass(frozen=True)
class Detection:
    x: int
    y: int
    width: int
    height: int
    confidence: float
    label: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "confidence": self.confidence,
            "class": self.label,
        }


@dataclass(frozen=True)
class Assessment:
    has_damage: bool
    detections: List[Detection] = field(default_factory=list)

    @property
    def damage(self) -> str:
        return "Yes" if self.has_damage else "No"

    def predictions(self) -> List[Dict[str, Any]]:
        return [d.to_dict() for d in self.detections]


STUB_DETECTION = Detection(x=100, y=100, width=50, height=50, confidence=0.95, label="damage")


def assess(image_path: str) -> Assessment:
    return Assessment(has_damage=True, detections=[STUB_DETECTION])
