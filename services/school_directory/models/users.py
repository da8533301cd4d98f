# services/school_directory/models/users.py
from sqlalchemy import Column, String, Text, Index
from shared.db import Base


class User(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True, index=True)
    email = Column(String(255), nullable=False)
    password = Column(String, nullable=True)   # plaintext, see DESIGN.md
    role = Column(String(20), nullable=False, default="user")
    username = Column(String(100), nullable=True)
    avatar_url = Column(Text, nullable=True)
    created_at = Column(String, nullable=False)  # ISO-8601 text

    __table_args__ = (
        Index('idx_user_email', 'email'),  # login and duplicate checks
    )
