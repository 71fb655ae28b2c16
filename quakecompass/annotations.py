"""Annotation merger: observed region markers plus static predictions.

Predictions are passed through untouched: they are never filtered,
aggregated or checked against the event batch. They get a fixed badge
style distinct from the circular observed markers so the renderer can
tell "observed" from "predicted" at a glance.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Iterable

from quakecompass.formatting import fmt_mag
from quakecompass.markers import RegionMarker
from quakecompass.records import PredictionAnnotation

OBSERVED = "observed"
PREDICTED = "predicted"


@dataclass(frozen=True)
class MarkerStyle:
    """How the renderer should draw a point.

    ``width``/``height`` are in pixels and the icon is anchored at its
    centre.
    """

    shape: str
    fill: str
    text_color: str
    width: float
    height: float
    border: str | None = None

    @property
    def anchor(self) -> tuple[float, float]:
        return (self.width / 2, self.height / 2)


PREDICTED_STYLE = MarkerStyle(
    shape="badge",
    fill="#10b981",
    text_color="#ffffff",
    width=140,
    height=30,
)


@dataclass(frozen=True)
class Overlay:
    """One renderable point, observed or predicted."""

    kind: str
    latitude: float
    longitude: float
    label: str
    title: str
    popup: tuple[tuple[str, str], ...]
    style: MarkerStyle
    annotation: PredictionAnnotation | None = None


def observed_overlay(marker: RegionMarker) -> Overlay:
    size = marker.encoding.marker_size
    return Overlay(
        kind=OBSERVED,
        latitude=marker.latitude,
        longitude=marker.longitude,
        label=marker.label,
        title=marker.region,
        popup=marker.popup,
        style=MarkerStyle(
            shape="circle",
            fill=marker.encoding.color,
            text_color="#ffffff",
            width=size,
            height=size,
            border="#ffffff",
        ),
    )


def prediction_overlay(annotation: PredictionAnnotation) -> Overlay:
    return Overlay(
        kind=PREDICTED,
        latitude=annotation.latitude,
        longitude=annotation.longitude,
        label=f"Predicted: {fmt_mag(annotation.magnitude)} Mag",
        title=annotation.label,
        popup=(
            ("Predicted Magnitude", fmt_mag(annotation.magnitude)),
            ("Year", str(annotation.year)),
        ),
        style=PREDICTED_STYLE,
        annotation=annotation,
    )


def merge(
    region_markers: Mapping[str, RegionMarker] | Iterable[RegionMarker],
    annotations: Iterable[PredictionAnnotation],
) -> list[Overlay]:
    """Observed markers in the order given, followed by every annotation."""
    if isinstance(region_markers, Mapping):
        region_markers = region_markers.values()
    overlays = [observed_overlay(m) for m in region_markers]
    overlays.extend(prediction_overlay(a) for a in annotations)
    return overlays
