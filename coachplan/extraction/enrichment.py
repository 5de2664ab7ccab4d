"""Post-extraction enrichment with caller-supplied setup data.

This is the only supported way to change an extracted tree after the
fact. The input tree is left untouched; a deep copy is returned.
"""

from loguru import logger

from coachplan.extraction.schemas import SessionSetup, WeekSession


def attach_setup_data(weeks: list[WeekSession], setup: SessionSetup) -> list[WeekSession]:
    """Merge plan name, entity name and training time into every node.

    Weeks receive the plan and entity names; days and sessions receive all
    three fields.

    Args:
        weeks: Extracted weeks
        setup: Coaching plan name, entity (team/academy) name and training time

    Returns:
        New list of weeks carrying the setup data
    """
    node_fields = {
        "coaching_plan_name": setup.coaching_plan_name,
        "entity_name": setup.entity_name,
        "training_time": setup.training_time,
    }
    week_fields = {key: value for key, value in node_fields.items() if key != "training_time"}

    enriched = [
        week.model_copy(
            update={
                **week_fields,
                "daily_sessions": [
                    daily.model_copy(
                        update={
                            **node_fields,
                            "sessions_for_day": [
                                entry.model_copy(update=node_fields, deep=True) for entry in daily.sessions_for_day
                            ],
                        }
                    )
                    for daily in week.daily_sessions
                ],
            }
        )
        for week in weeks
    ]
    logger.debug(
        "Attached setup data to extracted weeks",
        weeks=len(enriched),
        plan_name=setup.coaching_plan_name,
        entity_name=setup.entity_name,
    )
    return enriched
