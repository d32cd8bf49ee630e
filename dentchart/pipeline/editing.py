from __future__ import annotations

import logging
from typing import Optional

from dentchart.core.clinic_api import OdontogramApiClient
from dentchart.core.render.chart import ToothChart
from dentchart.core.schemas.chart import ChartClick
from dentchart.core.schemas.dental import DentalConditionType, ToothSurface
from dentchart.core.schemas.odontogram import Odontogram, ToothCondition

logger = logging.getLogger(__name__)


class ChartEditSession:
    """Applies chart clicks to an odontogram using the current brush.

    A surface click upserts that surface's finding, a tooth click sets the
    overall condition. Touched teeth stay dirty until ``flush``.
    """

    def __init__(
        self,
        odontogram: Odontogram,
        brush: DentalConditionType | str = DentalConditionType.CARIES,
    ) -> None:
        self.odontogram = odontogram
        self.brush = DentalConditionType(brush)
        self._persisted = {tooth.tooth_number for tooth in odontogram.teeth_conditions}
        self._dirty: set[int] = set()

    @property
    def dirty(self) -> tuple[int, ...]:
        return tuple(sorted(self._dirty))

    def set_brush(self, condition: DentalConditionType | str) -> None:
        self.brush = DentalConditionType(condition)

    def handle_click(self, click: ChartClick) -> ToothCondition:
        if click.surface is not None:
            surface = click.surface
            if surface is ToothSurface.OCCLUSAL:
                # Repaint the stored bite entry instead of adding a second one.
                bite = self.odontogram.get_condition(click.tooth_number).bite_entry()
                if bite is not None:
                    surface = bite.surface
            tooth = self.odontogram.set_surface_condition(click.tooth_number, surface, self.brush)
        else:
            tooth = self.odontogram.set_overall_condition(click.tooth_number, self.brush)
        self._dirty.add(click.tooth_number)
        return tooth

    def __call__(self, tooth_number: int, surface: Optional[ToothSurface]) -> None:
        self.handle_click(ChartClick(tooth_number=tooth_number, surface=surface))

    def chart(self, **props) -> ToothChart:
        return ToothChart(self.odontogram, on_tooth_click=self, editable=True, **props)

    def flush(self, client: OdontogramApiClient) -> Odontogram:
        """Persist dirty teeth; returns the server's copy of the odontogram."""
        if not self._dirty:
            return self.odontogram
        if not self.odontogram.id:
            raise ValueError("odontogram has no id; create it before saving tooth conditions")
        result = self.odontogram
        for tooth_number in self.dirty:
            tooth = self.odontogram.get_condition(tooth_number)
            if tooth_number in self._persisted:
                result = client.update_tooth_condition(self.odontogram.id, tooth)
            else:
                result = client.create_tooth_condition(self.odontogram.id, tooth)
            self._persisted.add(tooth_number)
            self._dirty.discard(tooth_number)
        logger.info("saved tooth conditions for odontogram %s", self.odontogram.id)
        self.odontogram = result
        return result


__all__ = ["ChartEditSession"]
