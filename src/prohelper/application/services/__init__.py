"""Controllers backing the invitation screens."""

from prohelper.application.services.invitation_action_controller import (
    ActionLane,
    InvitationActionController,
)
from prohelper.application.services.invitation_details_controller import (
    InvitationDetailsController,
)
from prohelper.application.services.invitation_list_controller import (
    InvitationListController,
    LoadMode,
)
from prohelper.application.services.invitation_stats_controller import (
    InvitationStatsController,
)
from prohelper.application.services.notification_aggregator import (
    NotificationAggregator,
)

__all__ = [
    "ActionLane",
    "InvitationActionController",
    "InvitationDetailsController",
    "InvitationListController",
    "InvitationStatsController",
    "LoadMode",
    "NotificationAggregator",
]
