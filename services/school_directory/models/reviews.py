# services/school_directory/models/reviews.py
from sqlalchemy import Column, String, Integer, Text, Index
from shared.db import Base


class Review(Base):
    __tablename__ = "reviews"

    id = Column(String, primary_key=True, index=True)
    # No foreign keys: reviews may outlive their school or author
    school_id = Column(String, nullable=False)
    user_id = Column(String, nullable=False)
    user_name = Column(String, nullable=False)
    rating = Column(Integer, nullable=False)
    comment = Column(Text, nullable=False, default="")
    created_at = Column(String, nullable=False)

    __table_args__ = (
        Index('idx_review_school', 'school_id'),
    )
