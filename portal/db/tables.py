"""
Table definitions (SQLAlchemy Core).

Tables:
- users           - login accounts
- students        - one academic profile per account
- results         - per-subject exam results
- placements      - placement drives / opportunities
- study_materials - uploaded notes, question papers, syllabi, lab manuals
- chat_sessions   - AI assistant conversations
- chat_messages   - messages inside a conversation

Every index here is something a route queries by. The Store uses
INDEXES to check that a lookup is backed by a declared index.
"""

from sqlalchemy import (
    MetaData, Table, Column, Integer, String, Text, Float, Boolean,
    DateTime, BigInteger, JSON, ForeignKey, CheckConstraint, Index, func
)

metadata = MetaData()


users = Table(
    "users", metadata,
    Column("user_id", Integer, primary_key=True, autoincrement=True),
    Column("email", String(255), nullable=False, unique=True),
    Column("password_hash", String(255), nullable=False),
    Column("is_admin", Boolean, nullable=False, default=False),
    Column("is_active", Boolean, nullable=False, default=True),
    Column("created_at", DateTime, nullable=False, server_default=func.now()),
)

students = Table(
    "students", metadata,
    Column("student_id", Integer, primary_key=True, autoincrement=True),
    Column("user_id", Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, unique=True),
    Column("usn", String(20), nullable=False),
    Column("name", String(100), nullable=False),
    Column("branch", String(100), nullable=False),
    Column("semester", Integer, nullable=False),
    Column("batch", String(20), nullable=False),
    Column("cgpa", Float, nullable=True),
    Column("created_at", DateTime, nullable=False, server_default=func.now()),
    Column("updated_at", DateTime, nullable=True),
    CheckConstraint("semester >= 1", name="ck_students_semester"),
)

results = Table(
    "results", metadata,
    Column("result_id", Integer, primary_key=True, autoincrement=True),
    Column("student_id", Integer, ForeignKey("students.student_id", ondelete="CASCADE"), nullable=False),
    Column("semester", Integer, nullable=False),
    Column("subject", String(200), nullable=False),
    Column("subject_code", String(20), nullable=False),
    Column("internal_marks", Float, nullable=True),
    Column("external_marks", Float, nullable=True),
    Column("total_marks", Float, nullable=True),
    Column("grade", String(20), nullable=True),
    Column("credits", Integer, nullable=False),
    Column("exam_type", String(20), nullable=False),
    Column("academic_year", String(20), nullable=False),
    Column("created_at", DateTime, nullable=False, server_default=func.now()),
    CheckConstraint("credits > 0", name="ck_results_credits_positive"),
    CheckConstraint("semester >= 1", name="ck_results_semester"),
)

placements = Table(
    "placements", metadata,
    Column("placement_id", Integer, primary_key=True, autoincrement=True),
    Column("company_name", String(200), nullable=False),
    Column("role", String(200), nullable=False),
    Column("package", String(100), nullable=True),
    Column("eligible_branches", JSON, nullable=False),
    Column("cgpa_criteria", Float, nullable=True),
    Column("description", Text, nullable=False),
    Column("application_deadline", DateTime, nullable=True),
    Column("drive_date", DateTime, nullable=True),
    Column("status", String(20), nullable=False),
    Column("requirements", JSON, nullable=True),
    Column("contact_info", String(255), nullable=True),
    Column("created_by", Integer, ForeignKey("users.user_id"), nullable=True),
    Column("created_at", DateTime, nullable=False, server_default=func.now()),
)

study_materials = Table(
    "study_materials", metadata,
    Column("material_id", Integer, primary_key=True, autoincrement=True),
    Column("title", String(200), nullable=False),
    Column("subject", String(200), nullable=False),
    Column("branch", String(100), nullable=False),
    Column("semester", Integer, nullable=False),
    Column("type", String(20), nullable=False),
    Column("file_id", String(64), nullable=True),
    Column("description", Text, nullable=True),
    Column("uploaded_by", Integer, ForeignKey("users.user_id"), nullable=False),
    Column("tags", JSON, nullable=True),
    Column("download_count", Integer, nullable=False, default=0),
    Column("created_at", DateTime, nullable=False, server_default=func.now()),
)

chat_sessions = Table(
    "chat_sessions", metadata,
    Column("session_id", Integer, primary_key=True, autoincrement=True),
    Column("user_id", Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False),
    Column("title", String(200), nullable=False),
    Column("last_message", Text, nullable=True),
    Column("created_at", DateTime, nullable=False, server_default=func.now()),
)

chat_messages = Table(
    "chat_messages", metadata,
    Column("message_id", Integer, primary_key=True, autoincrement=True),
    Column("session_id", Integer, ForeignKey("chat_sessions.session_id", ondelete="CASCADE"), nullable=False),
    Column("user_id", Integer, ForeignKey("users.user_id"), nullable=False),
    Column("content", Text, nullable=False),
    Column("role", String(20), nullable=False),
    Column("timestamp", BigInteger, nullable=False),
    Column("created_at", DateTime, nullable=False, server_default=func.now()),
)


# Named indexes: name -> (table, columns). Queries go through these names.
INDEXES = {
    "users.by_email": (users, ("email",)),
    "students.by_user": (students, ("user_id",)),
    "students.by_usn": (students, ("usn",)),
    "results.by_student": (results, ("student_id",)),
    "results.by_semester": (results, ("semester",)),
    "results.by_student_semester": (results, ("student_id", "semester")),
    "study_materials.by_subject": (study_materials, ("subject",)),
    "study_materials.by_branch_semester": (study_materials, ("branch", "semester")),
    "study_materials.by_type": (study_materials, ("type",)),
    "placements.by_status": (placements, ("status",)),
    "placements.by_deadline": (placements, ("application_deadline",)),
    "chat_sessions.by_user": (chat_sessions, ("user_id",)),
    "chat_messages.by_session": (chat_messages, ("session_id",)),
    "chat_messages.by_session_timestamp": (chat_messages, ("session_id", "timestamp")),
}

for _name, (_table, _columns) in INDEXES.items():
    if _name == "users.by_email":
        continue  # covered by the unique constraint
    Index(f"ix_{_name.replace('.', '_')}", *[_table.c[c] for c in _columns])

PRIMARY_KEYS = {
    table.name: list(table.primary_key.columns)[0].name
    for table in metadata.sorted_tables
}
