"""Table-oriented store over Flask-SQLAlchemy.

Services talk to the database only through ``SqlStore``: rows go in and come
out as plain dicts, filters are ``{column: value}`` mappings, and anything
that must be atomic runs as a named procedure through ``rpc``.

Filter keys are equality matches unless suffixed with ``__ne``, ``__lt``,
``__gte`` or ``__contains`` (list membership on a JSON column).
"""
import logging
from functools import wraps

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from careerpath.errors import DuplicateRow, StoreFailure
from careerpath.extensions import db
from careerpath.models import TABLES
from careerpath.services.capacity_service import RefusalReason, capacity_from

logger = logging.getLogger(__name__)

PROCEDURES = {}


def procedure(name):
    def register(fn):
        PROCEDURES[name] = fn
        return fn
    return register


def _store_call(fn):
    @wraps(fn)
    def wrapper(self, *args, **kwargs):
        try:
            return fn(self, *args, **kwargs)
        except IntegrityError as e:
            self.session.rollback()
            logger.warning("Constraint violation in %s: %s", fn.__name__, e.orig)
            raise DuplicateRow(str(e.orig))
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.exception("Store error in %s", fn.__name__)
            raise StoreFailure(str(e))
    return wrapper


def _split_filters(model, filters):
    """Return (sql criteria, python-side contains checks)."""
    criteria = []
    contains = []
    for key, value in (filters or {}).items():
        name, _, op = key.partition('__')
        column = getattr(model, name, None)
        if column is None:
            raise ValueError(f"Unknown column '{name}' on {model.__tablename__}")
        if op == '':
            criteria.append(column.is_(None) if value is None else column == value)
        elif op == 'ne':
            # NULL status rows are still "not cancelled"
            criteria.append((column != value) | column.is_(None))
        elif op == 'lt':
            criteria.append(column < value)
        elif op == 'gte':
            criteria.append(column >= value)
        elif op == 'contains':
            contains.append((name, value))
        else:
            raise ValueError(f"Unsupported filter operator '{op}'")
    return criteria, contains


def _matches_contains(obj, contains):
    for name, value in contains:
        if value not in (getattr(obj, name) or []):
            return False
    return True


class SqlStore:

    def __init__(self, session=None):
        self.session = session or db.session

    @staticmethod
    def _model(table):
        try:
            return TABLES[table]
        except KeyError:
            raise ValueError(f"Unknown table '{table}'")

    def _query(self, table, filters):
        model = self._model(table)
        criteria, contains = _split_filters(model, filters)
        return model, self.session.query(model).filter(*criteria), contains

    @_store_call
    def select(self, table, filters=None, order_by=None):
        """Rows matching ``filters``; ``order_by`` is a column name, ``-name`` for descending."""
        model, query, contains = self._query(table, filters)
        if order_by:
            column = getattr(model, order_by.lstrip('-'))
            query = query.order_by(column.desc() if order_by.startswith('-') else column.asc())
        return [obj.to_dict() for obj in query.all() if _matches_contains(obj, contains)]

    @_store_call
    def count(self, table, filters=None):
        model, query, contains = self._query(table, filters)
        if contains:
            return sum(1 for obj in query.all() if _matches_contains(obj, contains))
        return query.with_entities(func.count(model.id)).scalar()

    @_store_call
    def insert(self, table, row):
        obj = self._model(table)(**row)
        self.session.add(obj)
        self.session.commit()
        return obj.to_dict()

    @_store_call
    def update(self, table, filters, values):
        _, query, contains = self._query(table, filters)
        updated = []
        for obj in query.all():
            if not _matches_contains(obj, contains):
                continue
            for key, value in values.items():
                setattr(obj, key, value)
            updated.append(obj)
        self.session.commit()
        return [obj.to_dict() for obj in updated]

    @_store_call
    def delete(self, table, filters):
        if not filters:
            raise ValueError("Refusing to delete without filters")
        _, query, contains = self._query(table, filters)
        doomed = [obj for obj in query.all() if _matches_contains(obj, contains)]
        for obj in doomed:
            self.session.delete(obj)
        self.session.commit()
        return len(doomed)

    @_store_call
    def rpc(self, name, args):
        if name not in PROCEDURES:
            raise ValueError(f"Unknown procedure '{name}'")
        return PROCEDURES[name](self.session, args)


@procedure('claim_membership')
def claim_membership(session, args):
    """Insert a membership row if the resource has room, as one transaction.

    The resource row is locked (``FOR UPDATE`` where the backend supports it)
    before members are counted, and the (resource, user) unique constraint
    rejects a concurrent duplicate.
    """
    resource_model = TABLES[args['resource_table']]
    member_model = TABLES[args['membership_table']]
    resource_key = args['resource_key']
    row = args['row']
    user_id = row['user_id']

    resource = (session.query(resource_model)
                .filter(resource_model.id == args['resource_id'])
                .with_for_update()
                .first())
    if resource is None:
        session.rollback()
        return {'claimed': False, 'reason': 'NotFound'}

    fk = getattr(member_model, resource_key)
    members = session.query(member_model).filter(fk == resource.id)
    stale = None
    if hasattr(member_model, 'status'):
        stale = members.filter(member_model.user_id == user_id, member_model.status == 'cancelled').first()
        members = members.filter((member_model.status != 'cancelled') | member_model.status.is_(None))

    if members.filter(member_model.user_id == user_id).first() is not None:
        session.rollback()
        return {'claimed': False, 'reason': RefusalReason.ALREADY_REGISTERED.value}

    capacity = capacity_from(getattr(resource, args['capacity_field']))
    if not capacity.admits(members.count()):
        session.rollback()
        return {'claimed': False, 'reason': RefusalReason.FULL.value}

    if stale is not None:
        session.delete(stale)
        session.flush()

    membership = member_model(**row)
    session.add(membership)
    session.commit()
    return {'claimed': True, 'row': membership.to_dict()}


def _bump(session, model, column_name, row_id, delta):
    column = getattr(model, column_name)
    query = session.query(model).filter(model.id == row_id)
    if delta < 0:
        query = query.filter(column > 0)
    query.update({column: column + delta}, synchronize_session=False)
    session.commit()
    return session.query(column).filter(model.id == row_id).scalar()


@procedure('increment_discussion_likes')
def increment_discussion_likes(session, args):
    return _bump(session, TABLES['community_discussions'], 'likes_count', args['discussion_id'], 1)


@procedure('decrement_discussion_likes')
def decrement_discussion_likes(session, args):
    return _bump(session, TABLES['community_discussions'], 'likes_count', args['discussion_id'], -1)


@procedure('increment_mentor_sessions')
def increment_mentor_sessions(session, args):
    return _bump(session, TABLES['mentors'], 'total_sessions', args['mentor_id'], 1)


@procedure('create_study_group')
def create_study_group(session, args):
    """Create a study group and enrol its moderator in the same transaction."""
    group = TABLES['study_groups'](**args['group'])
    session.add(group)
    session.flush()
    session.add(TABLES['group_members'](group_id=group.id, user_id=group.moderator_id, role='moderator'))
    session.commit()
    return group.to_dict()
