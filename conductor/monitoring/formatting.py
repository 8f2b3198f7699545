"""
Text Rendering

Fixed-layout status report and reminder text for terminals and logs.
"""

from pathlib import Path

from ..core.entities import DelegationReport

RULE = "━" * 54
REMINDER_RULE = "━" * 56


def _breakdown_lines(breakdown: dict[str, int], unit: str, empty: str) -> str:
    ordered = sorted(breakdown.items(), key=lambda item: item[1], reverse=True)
    return "\n".join(f"  {name}: {count} {unit}" for name, count in ordered) or f"  {empty}"


def format_status(report: DelegationReport, alert_log_path: Path | str) -> str:
    """
    Render the delegation status.

    Section order is fixed: overall statistics, last 24h activity, agent
    breakdown, direct action breakdown.
    """
    stats = report.overall
    day = report.last_24h
    status_icon = "✅" if stats.meets_threshold else "⚠️"
    status = "PASSING ✅" if stats.meets_threshold else "BELOW THRESHOLD ⚠️"

    agents = _breakdown_lines(stats.agent_breakdown, "tasks", "No delegations yet")
    actions = _breakdown_lines(stats.direct_action_breakdown, "actions", "No direct actions yet")

    return f"""
{status_icon} CONDUCTOR DELEGATION MONITOR
{RULE}

OVERALL STATISTICS:
  Delegation Ratio: {stats.delegation_percentage}% ({stats.total_delegations}/{stats.total_actions})
  Alert Threshold:  {stats.threshold_percentage}%
  Status:           {status}

RECENT ACTIVITY (Last 24h):
  Delegations:      {day.delegations}
  Direct Actions:   {day.direct_actions}
  Ratio:            {day.percentage}%

AGENT BREAKDOWN:
{agents}

DIRECT ACTION BREAKDOWN:
{actions}

{RULE}

Alert Log: {alert_log_path}
Run 'conductor report' for detailed analysis
"""


def format_reminder(count: int) -> str:
    """Render the periodic orchestrator reminder"""
    return f"""
{REMINDER_RULE}
⚡ CRITICAL REMINDER ⚡

CONDUCTOR = ORCHESTRATOR ONLY

CONDUCTOR must NEVER execute tasks directly.
CONDUCTOR must ALWAYS delegate to specialized engineers.

Message Count: {count}
{REMINDER_RULE}
"""
