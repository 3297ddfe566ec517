"""
Small formatting helpers.

Used by the CLI to print compact summaries of drop plans.
"""

from __future__ import annotations

from droppoint.domain.models import DropPlan


def one_line_summary(plan: DropPlan) -> str:
    """Render a compact single-line summary for a drop plan."""
    parts = [f"map={plan.map.id}", f"radius={plan.radius_m:.0f}m ({plan.radius_units:.1f}u)"]
    if plan.interval is None:
        parts.append("flight path misses the drop circle")
        return " | ".join(parts)
    parts.append(f"inside t=[{plan.interval.t_in:.4f}, {plan.interval.t_out:.4f}]")
    if plan.drop is None:
        parts.append("no land inside the circle")
    else:
        parts.append(f"drop=({plan.drop.x:.1f}, {plan.drop.y:.1f}) t={plan.drop.t:.4f}")
        if plan.distance_to_target_m is not None:
            parts.append(f"~{int(round(plan.distance_to_target_m))}m to target")
    return " | ".join(parts)
