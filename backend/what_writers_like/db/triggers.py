"""Integrity Triggers — storage-level enforcement of the self-opinion invariant.

Invariants:
    - Every INSERT/UPDATE on opinions is rejected when works.author_id = NEW.writer_id
      for NEW.work_id, regardless of what the application checked before
    - Every UPDATE OF author_id on works is rejected when the new author already
      holds an opinion about that work
    - Both triggers fail with SELF_OPINION_MARKER in the error text; the stores
      match on it to raise SelfOpinionViolationError
    - PostgreSQL trigger locks the work row FOR SHARE, so a concurrent author
      change on that work waits for the opinion write (and vice versa)

Design Decisions:
    - Installed from an `after_create` listener on the opinions table: it is the
      last table created, so both referenced tables exist
    - Statements kept as plain lists so the alembic migration executes the same SQL
"""

from sqlalchemy import DDL, Table, event

from what_writers_like.core.domain_types import SELF_OPINION_MARKER


SQLITE_TRIGGERS = [
    f"""
    CREATE TRIGGER IF NOT EXISTS trg_opinions_not_self_insert
    BEFORE INSERT ON opinions
    FOR EACH ROW
    WHEN EXISTS (
        SELECT 1 FROM works WHERE id = NEW.work_id AND author_id = NEW.writer_id
    )
    BEGIN
        SELECT RAISE(ABORT, '{SELF_OPINION_MARKER}');
    END
    """,
    f"""
    CREATE TRIGGER IF NOT EXISTS trg_opinions_not_self_update
    BEFORE UPDATE ON opinions
    FOR EACH ROW
    WHEN EXISTS (
        SELECT 1 FROM works WHERE id = NEW.work_id AND author_id = NEW.writer_id
    )
    BEGIN
        SELECT RAISE(ABORT, '{SELF_OPINION_MARKER}');
    END
    """,
    f"""
    CREATE TRIGGER IF NOT EXISTS trg_works_author_not_opinion_holder
    BEFORE UPDATE OF author_id ON works
    FOR EACH ROW
    WHEN EXISTS (
        SELECT 1 FROM opinions WHERE work_id = NEW.id AND writer_id = NEW.author_id
    )
    BEGIN
        SELECT RAISE(ABORT, '{SELF_OPINION_MARKER}');
    END
    """,
]

POSTGRES_TRIGGERS = [
    f"""
    CREATE OR REPLACE FUNCTION check_writer_not_author() RETURNS TRIGGER AS $$
    DECLARE
        work_author BIGINT;
    BEGIN
        SELECT author_id INTO work_author FROM works WHERE id = NEW.work_id FOR SHARE;
        IF work_author = NEW.writer_id THEN
            RAISE EXCEPTION '{SELF_OPINION_MARKER}' USING ERRCODE = 'check_violation';
        END IF;
        RETURN NEW;
    END;
    $$ LANGUAGE plpgsql
    """,
    "DROP TRIGGER IF EXISTS trigger_check_writer_not_author ON opinions",
    """
    CREATE TRIGGER trigger_check_writer_not_author
    BEFORE INSERT OR UPDATE ON opinions
    FOR EACH ROW EXECUTE FUNCTION check_writer_not_author()
    """,
    f"""
    CREATE OR REPLACE FUNCTION check_author_holds_no_opinion() RETURNS TRIGGER AS $$
    BEGIN
        IF NEW.author_id IS DISTINCT FROM OLD.author_id AND EXISTS (
            SELECT 1 FROM opinions WHERE work_id = NEW.id AND writer_id = NEW.author_id
        ) THEN
            RAISE EXCEPTION '{SELF_OPINION_MARKER}' USING ERRCODE = 'check_violation';
        END IF;
        RETURN NEW;
    END;
    $$ LANGUAGE plpgsql
    """,
    "DROP TRIGGER IF EXISTS trigger_check_author_holds_no_opinion ON works",
    """
    CREATE TRIGGER trigger_check_author_holds_no_opinion
    BEFORE UPDATE OF author_id ON works
    FOR EACH ROW EXECUTE FUNCTION check_author_holds_no_opinion()
    """,
]

POSTGRES_DROP_TRIGGERS = [
    "DROP TRIGGER IF EXISTS trigger_check_author_holds_no_opinion ON works",
    "DROP FUNCTION IF EXISTS check_author_holds_no_opinion()",
    "DROP TRIGGER IF EXISTS trigger_check_writer_not_author ON opinions",
    "DROP FUNCTION IF EXISTS check_writer_not_author()",
]


def install_triggers(opinions_table: Table) -> None:
    """Attach trigger DDL to the opinions table's after_create event."""
    for statement in SQLITE_TRIGGERS:
        event.listen(
            opinions_table, "after_create",
            DDL(statement).execute_if(dialect="sqlite"),
        )
    for statement in POSTGRES_TRIGGERS:
        event.listen(
            opinions_table, "after_create",
            DDL(statement).execute_if(dialect="postgresql"),
        )
