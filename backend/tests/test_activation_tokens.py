from __future__ import annotations

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from uuid import uuid4

import pytest
from sqlalchemy.dialects import postgresql

from tabnews.domain_errors import DomainError, NotFoundError
from tabnews.models import ActivationToken
from tabnews.services import activation_tokens


def _sql(clause) -> str:
    return str(clause.compile(dialect=postgresql.dialect()))


class _QueryStub:
    def __init__(self, *, first_result=None):
        self._first_result = first_result
        self.criteria = []
        self.order = []
        self.locked = False

    def filter(self, *criteria):
        self.criteria.extend(criteria)
        return self

    def order_by(self, *clauses):
        self.order.extend(clauses)
        return self

    def with_for_update(self):
        self.locked = True
        return self

    def first(self):
        return self._first_result

    @property
    def criteria_sql(self) -> list[str]:
        return [_sql(criterion) for criterion in self.criteria]


class _SessionStub:
    def __init__(self, *, token=None):
        self._token = token
        self.queries: list[_QueryStub] = []
        self.added = []
        self.refreshed = []
        self.flush_calls = 0
        self.commit_calls = 0

    def query(self, model):
        if model is ActivationToken:
            query = _QueryStub(first_result=self._token)
            self.queries.append(query)
            return query
        raise AssertionError(f"Unexpected query model: {model}")

    def add(self, obj):
        self.added.append(obj)

    def flush(self):
        self.flush_calls += 1

    def refresh(self, obj):
        self.refreshed.append(obj)

    def commit(self):
        self.commit_calls += 1


def _token(*, used=False, expires_at=None):
    return SimpleNamespace(
        id=uuid4(),
        user_id=uuid4(),
        used=used,
        expires_at=expires_at or datetime.now(timezone.utc) + timedelta(minutes=15),
    )


def test_create_token_is_unused_and_reloaded_after_insert() -> None:
    db = _SessionStub()
    user_id = uuid4()

    token = activation_tokens.create_token(db, user_id)

    assert db.added == [token]
    assert db.flush_calls == 1
    assert db.refreshed == [token]
    assert db.commit_calls == 0
    assert isinstance(token, ActivationToken)
    assert token.id is not None
    assert token.user_id == user_id
    assert token.used is False


def test_create_token_expiry_uses_database_clock_plus_fifteen_minutes() -> None:
    db = _SessionStub()

    token = activation_tokens.create_token(db, uuid4())

    # Refresh is stubbed, so the column still holds the SQL expression sent to INSERT.
    compiled = token.expires_at.compile(dialect=postgresql.dialect())
    assert str(compiled).startswith("now() + ")
    assert list(compiled.params.values()) == [timedelta(minutes=15)]


def test_create_token_does_not_reuse_previous_tokens() -> None:
    db = _SessionStub()
    user_id = uuid4()

    first = activation_tokens.create_token(db, user_id)
    second = activation_tokens.create_token(db, user_id)

    assert first.id != second.id
    assert len(db.added) == 2


def test_find_token_by_id_filters_on_id_only_and_locks_when_requested() -> None:
    token = _token(used=True)
    db = _SessionStub(token=token)

    result = activation_tokens.find_token_by_id(db, token.id, for_update=True)

    assert result is token
    query = db.queries[0]
    assert query.locked is True
    assert len(query.criteria) == 1
    assert query.criteria_sql[0].startswith("activate_account_tokens.id = ")
    assert query.criteria[0].right.value == token.id


def test_find_token_by_id_does_not_lock_by_default() -> None:
    token = _token()
    db = _SessionStub(token=token)

    activation_tokens.find_token_by_id(db, token.id)

    assert db.queries[0].locked is False


def test_find_token_by_id_missing_raises_not_found_with_action() -> None:
    db = _SessionStub(token=None)
    token_id = uuid4()

    with pytest.raises(NotFoundError) as exc:
        activation_tokens.find_token_by_id(db, token_id)

    assert isinstance(exc.value, DomainError)
    assert exc.value.http_status == 404
    assert exc.value.code == "ACTIVATION_TOKEN_NOT_FOUND"
    assert str(exc.value) == f'O token "{token_id}" não foi encontrado no sistema ou expirou.'
    assert exc.value.action == "Faça um novo cadastro."


def test_find_valid_token_by_id_requires_unused_and_unexpired_by_database_clock() -> None:
    token = _token()
    db = _SessionStub(token=token)

    result = activation_tokens.find_valid_token_by_id(db, token.id)

    assert result is token
    criteria_sql = db.queries[0].criteria_sql
    assert len(criteria_sql) == 3
    assert criteria_sql[0].startswith("activate_account_tokens.id = ")
    assert "activate_account_tokens.used IS false" in criteria_sql
    assert "activate_account_tokens.expires_at >= now()" in criteria_sql


def test_find_valid_token_by_id_reports_invalid_token_like_a_missing_one() -> None:
    db = _SessionStub(token=None)
    token_id = uuid4()

    with pytest.raises(NotFoundError) as valid_exc:
        activation_tokens.find_valid_token_by_id(db, token_id)
    with pytest.raises(NotFoundError) as any_exc:
        activation_tokens.find_token_by_id(db, token_id)

    assert valid_exc.value.code == any_exc.value.code
    assert valid_exc.value.message == any_exc.value.message
    assert valid_exc.value.action == any_exc.value.action


def test_find_latest_token_by_user_id_orders_newest_first() -> None:
    token = _token()
    db = _SessionStub(token=token)

    result = activation_tokens.find_latest_token_by_user_id(db, token.user_id)

    assert result is token
    query = db.queries[0]
    assert query.criteria_sql[0].startswith("activate_account_tokens.user_id = ")
    assert query.criteria[0].right.value == token.user_id
    assert [_sql(clause) for clause in query.order] == ["activate_account_tokens.created_at DESC"]


def test_find_latest_token_by_user_id_missing_mentions_user_id() -> None:
    db = _SessionStub(token=None)
    user_id = uuid4()

    with pytest.raises(NotFoundError, match=str(user_id)) as exc:
        activation_tokens.find_latest_token_by_user_id(db, user_id)

    assert exc.value.action == 'Verifique se o "id" do usuário está digitado corretamente.'


def test_mark_token_used_flips_flag_and_flushes() -> None:
    token = _token()
    db = _SessionStub(token=token)

    result = activation_tokens.mark_token_used(db, token.id)

    assert result is token
    assert token.used is True
    assert db.flush_calls == 1
    assert db.commit_calls == 0
