from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional

from .dates import resolve_today
from .inputs import DEFAULT_ASSUMPTIONS, HorizonAssumptions, LifeEvent, Snapshot
from .projection import DAYS_PER_MONTH, compute_fire_projection
from .rounding import round_half_up

logger = logging.getLogger(__name__)


LIFE_EVENT_CATALOG = {
    "sabbatical": {
        "label": "Sabbatical",
        "default_cost": 2_000,
        "default_monthly_cost": 0,
        "default_duration": 6,
        "description": "Unpaid leave from work",
    },
    "world_trip": {
        "label": "World trip",
        "default_cost": 15_000,
        "default_monthly_cost": 2_000,
        "default_duration": 12,
        "description": "Extended travel around the world",
    },
    "children": {
        "label": "Children",
        "default_cost": 5_000,
        "default_monthly_cost": 500,
        "default_duration": 216,  # 18 years
        "description": "Cost of raising a child",
    },
    "renovation": {
        "label": "Renovation",
        "default_cost": 30_000,
        "default_monthly_cost": 0,
        "default_duration": 0,
        "description": "Major home renovation",
    },
    "study": {
        "label": "Study",
        "default_cost": 8_000,
        "default_monthly_cost": 0,
        "default_duration": 24,
        "description": "Education or course",
    },
    "career_change": {
        "label": "Career change",
        "default_cost": 3_000,
        "default_monthly_cost": 0,
        "default_duration": 6,
        "description": "Transition to different work",
    },
    "part_time": {
        "label": "Part-time work",
        "default_cost": 0,
        "default_monthly_cost": 0,
        "default_duration": 60,
        "description": "Working fewer hours",
    },
    "early_retirement": {
        "label": "Early retirement",
        "default_cost": 0,
        "default_monthly_cost": 0,
        "default_duration": 0,
        "description": "Stopping work earlier",
    },
    "move": {
        "label": "Move",
        "default_cost": 10_000,
        "default_monthly_cost": 0,
        "default_duration": 0,
        "description": "Moving house or city",
    },
    "wedding": {
        "label": "Wedding",
        "default_cost": 20_000,
        "default_monthly_cost": 0,
        "default_duration": 0,
        "description": "Wedding and marriage",
    },
    "custom": {
        "label": "Other",
        "default_cost": 0,
        "default_monthly_cost": 0,
        "default_duration": 0,
        "description": "Your own life event",
    },
}


@dataclass(frozen=True)
class LifeEventImpact:
    event: LifeEvent
    fire_delay_months: int
    total_cost: float
    freedom_days_lost: int


def life_event_from_catalog(event_type: str, **overrides) -> LifeEvent:
    """LifeEvent pre-filled with a catalog template's defaults."""
    if event_type not in LIFE_EVENT_CATALOG:
        raise ValueError(f"Unknown life event type '{event_type}'.")
    template = LIFE_EVENT_CATALOG[event_type]
    fields = {
        "name": template["label"],
        "event_type": event_type,
        "one_time_cost": float(template["default_cost"]),
        "monthly_cost_change": float(template["default_monthly_cost"]),
        "duration_months": template["default_duration"],
    }
    fields.update(overrides)
    return LifeEvent(**fields)


def adjusted_snapshot(snapshot: Snapshot, event: LifeEvent) -> Snapshot:
    """Snapshot as it would look with the event applied; assets may go negative."""
    return dataclasses.replace(
        snapshot,
        total_assets=snapshot.total_assets - event.one_time_cost,
        monthly_expenses=snapshot.monthly_expenses + event.monthly_cost_change,
        monthly_income=snapshot.monthly_income + event.monthly_income_change,
    )


def compute_life_event_impact(
    snapshot: Snapshot,
    event: LifeEvent,
    *,
    assumptions: HorizonAssumptions = DEFAULT_ASSUMPTIONS,
    today: Optional[date] = None,
) -> LifeEventImpact:
    """Delay to FIRE and total cost of one life event, relative to the baseline projection."""
    today = resolve_today(today)
    baseline = compute_fire_projection(snapshot, assumptions=assumptions, today=today)
    adjusted = compute_fire_projection(adjusted_snapshot(snapshot, event), assumptions=assumptions, today=today)

    delay_months = round_half_up((adjusted.countdown_days - baseline.countdown_days) / DAYS_PER_MONTH)

    duration = event.duration_months
    spent = event.one_time_cost + event.monthly_cost_change * duration
    total_cost = spent - event.monthly_income_change * duration

    daily_expense = snapshot.yearly_expenses / 365 if snapshot.monthly_expenses > 0 else 0.0
    days_lost = round_half_up(total_cost / daily_expense) if daily_expense > 0 else 0

    logger.debug("Life event '%s': delay %d months, cost %.0f", event.name, delay_months, total_cost)
    return LifeEventImpact(
        event=event,
        fire_delay_months=max(0, delay_months),
        total_cost=total_cost,
        freedom_days_lost=max(0, days_lost),
    )


def compute_life_event_impacts(
    snapshot: Snapshot,
    events: Iterable[LifeEvent],
    *,
    assumptions: HorizonAssumptions = DEFAULT_ASSUMPTIONS,
    today: Optional[date] = None,
) -> List[LifeEventImpact]:
    today = resolve_today(today)
    return [compute_life_event_impact(snapshot, e, assumptions=assumptions, today=today) for e in events]
