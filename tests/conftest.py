"""
Shared fixtures: an in-memory stand-in for the Supabase client and a
TestClient wired to it through dependency overrides.
"""

import uuid
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from storefront.core.rate_limit import limiter
from storefront.database.supabase_client import get_auth_client, get_service_supabase, get_supabase
from storefront.main import app, session_resolver
from storefront.modules.auth.service import AuthService


class FakeResponse:
    def __init__(self, data, count=None):
        self.data = data
        self.count = count


class FakeQuery:
    """Records a PostgREST-style call chain and runs it against FakeSupabase.tables"""

    def __init__(self, db, table):
        self.db = db
        self.table = table
        self.op = "select"
        self.payload = None
        self.filters = []
        self.order_by = None
        self.limit_n = None
        self.range_bounds = None
        self.count_mode = None
        self.upsert_opts = {}

    def select(self, columns="*", count=None):
        self.op = "select"
        self.count_mode = count
        return self

    def insert(self, rows):
        self.op, self.payload = "insert", rows
        return self

    def upsert(self, rows, on_conflict="", ignore_duplicates=False):
        self.op, self.payload = "upsert", rows
        self.upsert_opts = {"on_conflict": on_conflict, "ignore_duplicates": ignore_duplicates}
        return self

    def update(self, values):
        self.op, self.payload = "update", values
        return self

    def delete(self):
        self.op = "delete"
        return self

    def eq(self, column, value):
        self.filters.append(lambda row: row.get(column) == value)
        return self

    def in_(self, column, values):
        values = list(values)
        self.filters.append(lambda row: row.get(column) in values)
        return self

    def is_(self, column, value):
        expected = None if value == "null" else value
        self.filters.append(lambda row: row.get(column) is expected)
        return self

    def order(self, column, desc=False):
        self.order_by = (column, desc)
        return self

    def limit(self, n):
        self.limit_n = n
        return self

    def range(self, start, end):
        self.range_bounds = (start, end)
        return self

    def _matching(self):
        rows = self.db.tables.setdefault(self.table, [])
        return [row for row in rows if all(f(row) for f in self.filters)]

    def execute(self):
        self.db.calls.append((self.table, self.op))
        if self.db.fail_on is not None and self.db.fail_on in (self.table, "*"):
            raise RuntimeError("connection refused")

        rows = self.db.tables.setdefault(self.table, [])
        if self.op == "insert":
            new_rows = self.payload if isinstance(self.payload, list) else [self.payload]
            inserted = [{"id": str(uuid.uuid4()), **row} for row in new_rows]
            rows.extend(inserted)
            return FakeResponse(inserted)
        if self.op == "upsert":
            key = self.upsert_opts["on_conflict"] or "id"
            inserted = []
            for row in self.payload:
                if any(existing.get(key) == row.get(key) for existing in rows):
                    continue
                inserted.append({"id": str(uuid.uuid4()), **row})
            rows.extend(inserted)
            return FakeResponse(inserted)
        if self.op == "update":
            matched = self._matching()
            for row in matched:
                row.update(self.payload)
            return FakeResponse([dict(row) for row in matched])
        if self.op == "delete":
            matched = self._matching()
            self.db.tables[self.table] = [row for row in rows if row not in matched]
            return FakeResponse(matched)

        result = self._matching()
        total = len(result)
        if self.order_by:
            column, desc = self.order_by
            result = sorted(result, key=lambda row: row.get(column) or "", reverse=desc)
        if self.range_bounds:
            start, end = self.range_bounds
            result = result[start:end + 1]
        if self.limit_n is not None:
            result = result[:self.limit_n]
        return FakeResponse([dict(row) for row in result], total if self.count_mode else None)


class FakeAdmin:
    def __init__(self, auth):
        self.auth = auth
        self.deleted = []
        self.signed_out = []

    def update_user_by_id(self, user_id, attributes):
        self.auth.updates.append((user_id, attributes))
        user = self.auth.users_by_id[user_id]
        user.update(attributes)
        return SimpleNamespace(user=SimpleNamespace(id=user_id, email=user["email"]))

    def delete_user(self, user_id, should_soft_delete=False):
        self.deleted.append(user_id)
        self.auth.users_by_id.pop(user_id, None)

    def sign_out(self, jwt, scope="global"):
        self.signed_out.append((jwt, scope))
        self.auth.tokens.pop(jwt, None)


class FakeAuth:
    def __init__(self):
        self.users_by_id = {}
        self.tokens = {}
        self.updates = []
        self.calls = []
        self.admin = FakeAdmin(self)

    def add_user(self, email, password="secret123", user_id=None):
        user_id = user_id or str(uuid.uuid4())
        self.users_by_id[user_id] = {"email": email, "password": password}
        return user_id

    def issue_token(self, user_id):
        token = f"token-{uuid.uuid4()}"
        self.tokens[token] = user_id
        return token

    def _user(self, user_id):
        return SimpleNamespace(id=user_id, email=self.users_by_id[user_id]["email"])

    def sign_up(self, credentials):
        self.calls.append("sign_up")
        if any(u["email"] == credentials["email"] for u in self.users_by_id.values()):
            raise Exception("User already registered")
        user_id = self.add_user(credentials["email"], credentials["password"])
        return SimpleNamespace(user=self._user(user_id), session=None)

    def sign_in_with_password(self, credentials):
        self.calls.append("sign_in_with_password")
        for user_id, user in self.users_by_id.items():
            if user["email"] == credentials["email"] and user["password"] == credentials["password"]:
                session = SimpleNamespace(access_token=self.issue_token(user_id))
                return SimpleNamespace(user=self._user(user_id), session=session)
        raise Exception("Invalid login credentials")

    def get_user(self, jwt=None):
        self.calls.append("get_user")
        if jwt not in self.tokens:
            raise Exception("invalid JWT: unable to parse or verify signature")
        return SimpleNamespace(user=self._user(self.tokens[jwt]))


class FakeSupabase:
    def __init__(self):
        self.tables = {}
        self.calls = []
        self.fail_on = None
        self.auth = FakeAuth()

    def table(self, name):
        return FakeQuery(self, name)

    @property
    def writes(self):
        return [call for call in self.calls if call[1] != "select"]


@pytest.fixture
def fake_supabase():
    return FakeSupabase()


@pytest.fixture
def client(fake_supabase):
    """TestClient whose shared, per-request auth and service-role clients are all fake_supabase"""
    limiter.reset()
    app.dependency_overrides[get_supabase] = lambda: fake_supabase
    app.dependency_overrides[get_auth_client] = lambda: fake_supabase
    app.dependency_overrides[get_service_supabase] = lambda: fake_supabase
    default_factory = session_resolver.auth_service_factory
    session_resolver.auth_service_factory = lambda: AuthService(fake_supabase, fake_supabase, fake_supabase)
    yield TestClient(app)
    session_resolver.auth_service_factory = default_factory
    app.dependency_overrides.clear()


@pytest.fixture
def create_user(fake_supabase):
    """Factory: user row + auth user + access token; returns dict with auth headers"""
    def _create(role="BUYER", email=None, name="Test User", password="secret123"):
        email = email or f"{uuid.uuid4().hex[:8]}@example.com"
        user_id = fake_supabase.auth.add_user(email, password)
        fake_supabase.tables.setdefault("users", []).append({
            "id": user_id, "email": email, "name": name, "role": role,
        })
        token = fake_supabase.auth.issue_token(user_id)
        return {
            "id": user_id,
            "email": email,
            "role": role,
            "token": token,
            "headers": {"Authorization": f"Bearer {token}"},
        }
    return _create


@pytest.fixture
def buyer(create_user):
    return create_user(role="BUYER", email="buyer@example.com", name="Buyer User")


@pytest.fixture
def seller(create_user):
    return create_user(role="SELLER", email="seller@example.com", name="Seller User")
