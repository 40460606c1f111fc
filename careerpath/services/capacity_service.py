import enum
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from careerpath.errors import AlreadyRegistered, DuplicateRow, ResourceFull, ResourceNotFound

logger = logging.getLogger(__name__)


class Unlimited:
    """Capacity of a resource with no member limit."""

    def admits(self, count: int) -> bool:
        return True

    def __repr__(self):
        return 'Unlimited'


@dataclass(frozen=True)
class Max:
    limit: int

    def admits(self, count: int) -> bool:
        return count < self.limit


UNLIMITED = Unlimited()


def capacity_from(value):
    """Map a nullable capacity column onto ``Unlimited`` or ``Max(n)``."""
    if value is None:
        return UNLIMITED
    return Max(int(value))


class RefusalReason(str, enum.Enum):
    ALREADY_REGISTERED = 'AlreadyRegistered'
    FULL = 'Full'


@dataclass(frozen=True)
class ResourceKind:
    """Where a joinable resource and its membership rows live in the store."""
    label: str
    table: str
    membership_table: str
    resource_key: str
    capacity_field: str
    timestamp_field: str
    defaults: dict = field(default_factory=dict, hash=False)
    tracks_status: bool = False
    full_message: str = 'Resource is full'
    duplicate_message: str = 'Already registered'

    def live_filters(self, resource_id, user_id=None):
        filters = {self.resource_key: resource_id}
        if user_id is not None:
            filters['user_id'] = user_id
        if self.tracks_status:
            filters['status__ne'] = 'cancelled'
        return filters


EVENT = ResourceKind(
    label='Event',
    table='community_events',
    membership_table='event_registrations',
    resource_key='event_id',
    capacity_field='max_attendees',
    timestamp_field='registered_at',
    defaults={'status': 'confirmed'},
    tracks_status=True,
    full_message='Event is full',
    duplicate_message='Already registered for this event',
)

STUDY_GROUP = ResourceKind(
    label='Study group',
    table='study_groups',
    membership_table='group_members',
    resource_key='group_id',
    capacity_field='max_members',
    timestamp_field='joined_at',
    defaults={'role': 'member'},
    full_message='Group is full',
    duplicate_message='Already a member of this group',
)


@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason: Optional[RefusalReason] = None

    def to_dict(self):
        data = {'allowed': self.allowed}
        if self.reason is not None:
            data['reason'] = self.reason.value
        return data


class CapacityManager:
    """Registration rules for capacity-bounded resources (events, study groups).

    ``can_register`` is a read-only decision. ``register`` hands the same
    checks to the store's ``claim_membership`` procedure so the count and the
    insert happen in one transaction.
    """

    def __init__(self, store):
        self.store = store

    def _load_resource(self, kind, resource_id):
        rows = self.store.select(kind.table, {'id': resource_id})
        if not rows:
            raise ResourceNotFound(f"{kind.label} not found")
        return rows[0]

    def member_count(self, kind, resource_id):
        return self.store.count(kind.membership_table, kind.live_filters(resource_id))

    def can_register(self, kind, resource_id, participant) -> Decision:
        resource = self._load_resource(kind, resource_id)

        existing = self.store.select(kind.membership_table,
                                     kind.live_filters(resource_id, participant.user_id))
        if existing:
            return Decision(False, RefusalReason.ALREADY_REGISTERED)

        capacity = capacity_from(resource.get(kind.capacity_field))
        if not capacity.admits(self.member_count(kind, resource_id)):
            return Decision(False, RefusalReason.FULL)

        return Decision(True)

    def register(self, kind, resource_id, participant):
        row = dict(kind.defaults)
        row.update({
            kind.resource_key: resource_id,
            'user_id': participant.user_id,
            kind.timestamp_field: datetime.utcnow(),
        })

        try:
            result = self.store.rpc('claim_membership', {
                'resource_table': kind.table,
                'resource_id': resource_id,
                'membership_table': kind.membership_table,
                'resource_key': kind.resource_key,
                'capacity_field': kind.capacity_field,
                'row': row,
            })
        except DuplicateRow:
            # Lost a race against a concurrent insert for the same pair
            raise AlreadyRegistered(kind.duplicate_message)

        if result['claimed']:
            logger.info("User %s joined %s %s", participant.user_id, kind.label.lower(), resource_id)
            return result['row']

        reason = result['reason']
        if reason == 'NotFound':
            raise ResourceNotFound(f"{kind.label} not found")
        if reason == RefusalReason.ALREADY_REGISTERED.value:
            raise AlreadyRegistered(kind.duplicate_message)
        raise ResourceFull(kind.full_message)

    def unregister(self, kind, resource_id, participant):
        """Remove the participant's membership. Nothing to remove is not an error."""
        removed = self.store.delete(kind.membership_table,
                                    {kind.resource_key: resource_id, 'user_id': participant.user_id})
        if removed:
            logger.info("User %s left %s %s", participant.user_id, kind.label.lower(), resource_id)
