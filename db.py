"""
Postgres storage layer for employees and their I-9 forms.

The workflow engine only talks to this module through ``Store``; every
method is a single short transaction. Writes return the row as stored
(``RETURNING *``).

Connection: DATABASE_URL env var.
"""

import uuid
from contextlib import contextmanager

import psycopg2
import psycopg2.extras
from psycopg2 import sql

from config import MUTABLE_FIELDS

_DDL = """
CREATE TABLE IF NOT EXISTS employees (
    id          TEXT PRIMARY KEY,
    phone       TEXT NOT NULL UNIQUE,
    email       TEXT,
    created_at  TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    updated_at  TIMESTAMPTZ NOT NULL DEFAULT NOW()
);

CREATE TABLE IF NOT EXISTS i9_forms (
    id                        TEXT PRIMARY KEY,
    employee_id               TEXT NOT NULL REFERENCES employees(id) ON DELETE CASCADE,
    last_name                 VARCHAR(100) NOT NULL DEFAULT '',
    first_name                VARCHAR(100) NOT NULL DEFAULT '',
    middle_initial            VARCHAR(10),
    other_last_names          VARCHAR(255),
    address                   VARCHAR(255) NOT NULL DEFAULT '',
    apt_number                VARCHAR(20),
    city                      VARCHAR(100) NOT NULL DEFAULT '',
    state                     VARCHAR(2) NOT NULL DEFAULT 'CA',
    zip_code                  VARCHAR(10) NOT NULL DEFAULT '00000',
    date_of_birth             TEXT NOT NULL DEFAULT '1990-01-01',
    ssn                       TEXT,
    email                     VARCHAR(255) NOT NULL DEFAULT '',
    phone                     TEXT NOT NULL DEFAULT '',
    citizenship_status        TEXT NOT NULL DEFAULT 'us_citizen',
    uscis_a_number            VARCHAR(50),
    alien_expiration_date     TEXT,
    form_i94_number           VARCHAR(50),
    foreign_passport_number   VARCHAR(50),
    country_of_issuance       VARCHAR(100),
    status                    TEXT NOT NULL DEFAULT 'in_progress'
        CHECK (status IN ('in_progress', 'completed', 'needs_correction', 'data_approved', 'verified')),
    completed_at              TIMESTAMPTZ,
    employer_notes            TEXT,
    employer_reviewed_at      TIMESTAMPTZ,
    employer_reviewed_by      TEXT,
    employee_signature_date   TIMESTAMPTZ,
    employee_signature_method TEXT,
    created_at                TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    updated_at                TIMESTAMPTZ NOT NULL DEFAULT NOW()
);

CREATE INDEX IF NOT EXISTS ix_i9_forms_employee_id ON i9_forms (employee_id);
CREATE INDEX IF NOT EXISTS ix_i9_forms_status ON i9_forms (status);
"""

# Columns a workflow write may touch besides the form fields themselves.
_WORKFLOW_COLUMNS = frozenset(
    {
        "status",
        "completed_at",
        "employer_notes",
        "employer_reviewed_at",
        "employer_reviewed_by",
        "employee_signature_date",
        "employee_signature_method",
    }
)
WRITABLE_COLUMNS = MUTABLE_FIELDS | _WORKFLOW_COLUMNS


def _new_id() -> str:
    return str(uuid.uuid4())


def _check_columns(columns) -> None:
    unknown = set(columns) - WRITABLE_COLUMNS
    if unknown:
        raise ValueError(f"Refusing to write unknown columns: {sorted(unknown)}")


class Store:
    """Keyed record store over the employees and i9_forms tables."""

    def __init__(self, database_url: str):
        self.database_url = database_url

    @contextmanager
    def _get_conn(self):
        conn = psycopg2.connect(self.database_url)
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    @contextmanager
    def _cursor(self):
        with self._get_conn() as conn:
            with conn.cursor(cursor_factory=psycopg2.extras.RealDictCursor) as cur:
                yield cur

    def _one(self, query, params) -> dict | None:
        with self._cursor() as cur:
            cur.execute(query, params)
            row = cur.fetchone()
            return dict(row) if row else None

    def _all(self, query, params=()) -> list[dict]:
        with self._cursor() as cur:
            cur.execute(query, params)
            return [dict(r) for r in cur.fetchall()]

    def init_db(self) -> None:
        with self._get_conn() as conn:
            with conn.cursor() as cur:
                cur.execute(_DDL)

    def ping(self) -> bool:
        with self._get_conn() as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT 1")
                return cur.fetchone() is not None

    # -- employees ---------------------------------------------------------

    def fetch_employee(self, employee_id: str) -> dict | None:
        return self._one("SELECT * FROM employees WHERE id = %s", (employee_id,))

    def fetch_employee_by_phone(self, phone: str) -> dict | None:
        return self._one("SELECT * FROM employees WHERE phone = %s", (phone,))

    def fetch_all_employees(self) -> list[dict]:
        return self._all("SELECT * FROM employees ORDER BY created_at DESC")

    def insert_employee(self, phone: str, email: str | None = None) -> dict | None:
        """Insert and return the new row, or None if the phone is already taken."""
        return self._one(
            """INSERT INTO employees (id, phone, email) VALUES (%s, %s, %s)
               ON CONFLICT (phone) DO NOTHING
               RETURNING *""",
            (_new_id(), phone, email),
        )

    def update_employee_email(self, employee_id: str, email: str | None) -> dict | None:
        return self._one(
            "UPDATE employees SET email = %s, updated_at = NOW() WHERE id = %s RETURNING *",
            (email, employee_id),
        )

    def delete_employee(self, employee_id: str) -> bool:
        """Delete an employee; its form goes with it (ON DELETE CASCADE)."""
        with self._cursor() as cur:
            cur.execute("DELETE FROM employees WHERE id = %s", (employee_id,))
            return cur.rowcount > 0

    # -- forms -------------------------------------------------------------

    def fetch_form(self, form_id: str) -> dict | None:
        return self._one("SELECT * FROM i9_forms WHERE id = %s", (form_id,))

    def fetch_form_by_employee(self, employee_id: str) -> dict | None:
        """Return the employee's live form (the newest one if duplicates slipped in)."""
        return self._one(
            "SELECT * FROM i9_forms WHERE employee_id = %s ORDER BY created_at DESC LIMIT 1",
            (employee_id,),
        )

    def fetch_forms(self, status: str | None = None, employee_id: str | None = None) -> list[dict]:
        clauses, params = [], []
        if status:
            clauses.append(sql.SQL("status = %s"))
            params.append(status)
        if employee_id:
            clauses.append(sql.SQL("employee_id = %s"))
            params.append(employee_id)
        query = sql.SQL("SELECT * FROM i9_forms")
        if clauses:
            query += sql.SQL(" WHERE ") + sql.SQL(" AND ").join(clauses)
        query += sql.SQL(" ORDER BY created_at DESC")
        return self._all(query, params)

    def insert_form(self, employee_id: str, fields: dict) -> dict:
        _check_columns(fields)
        columns = ["id", "employee_id", *fields]
        query = sql.SQL("INSERT INTO i9_forms ({}) VALUES ({}) RETURNING *").format(
            sql.SQL(", ").join(map(sql.Identifier, columns)),
            sql.SQL(", ").join([sql.Placeholder()] * len(columns)),
        )
        return self._one(query, [_new_id(), employee_id, *fields.values()])

    def update_form_field(self, employee_id: str, field_name: str, value) -> dict | None:
        """Single-column write used by the voice tools."""
        if field_name not in MUTABLE_FIELDS:
            raise ValueError(f"Refusing to write column {field_name!r}")
        query = sql.SQL(
            """UPDATE i9_forms SET {} = %s, updated_at = NOW()
               WHERE id = (SELECT id FROM i9_forms WHERE employee_id = %s
                           ORDER BY created_at DESC LIMIT 1)
               RETURNING *"""
        ).format(sql.Identifier(field_name))
        return self._one(query, (value, employee_id))

    def update_form(
        self, form_id: str, changes: dict, expected_status: str | None = None
    ) -> dict | None:
        """
        Apply *changes* to one form and return the new row.

        With *expected_status* the write only lands if the row still has that
        status; None is returned otherwise so the caller can report the
        conflicting transition.
        """
        _check_columns(changes)
        assignments = [
            sql.SQL("{} = %s").format(sql.Identifier(column)) for column in changes
        ]
        assignments.append(sql.SQL("updated_at = NOW()"))
        params = [*changes.values(), form_id]
        query = sql.SQL("UPDATE i9_forms SET {} WHERE id = %s").format(
            sql.SQL(", ").join(assignments)
        )
        if expected_status is not None:
            query += sql.SQL(" AND status = %s")
            params.append(expected_status)
        query += sql.SQL(" RETURNING *")
        return self._one(query, params)

    def delete_form(self, form_id: str) -> bool:
        with self._cursor() as cur:
            cur.execute("DELETE FROM i9_forms WHERE id = %s", (form_id,))
            return cur.rowcount > 0

    def count_forms_by_status(self) -> dict[str, int]:
        rows = self._all("SELECT status, COUNT(*) AS count FROM i9_forms GROUP BY status")
        return {r["status"]: int(r["count"]) for r in rows}

    def delete_duplicate_forms(self) -> int:
        """Keep only the newest form per employee. Returns the number deleted."""
        with self._cursor() as cur:
            cur.execute(
                """DELETE FROM i9_forms
                   WHERE id NOT IN (
                       SELECT DISTINCT ON (employee_id) id
                       FROM i9_forms
                       ORDER BY employee_id, created_at DESC
                   )"""
            )
            return cur.rowcount
