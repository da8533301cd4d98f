# services/school_directory/models/schools.py

from sqlalchemy import Column, Float, String, Text
from shared.db import Base, StringList


class School(Base):
    __tablename__ = "schools"

    id = Column(String, primary_key=True, index=True)
    name = Column(String, nullable=False)
    address = Column(String, nullable=False)
    city = Column(String, nullable=False, index=True)
    phone = Column(StringList, nullable=False, default=list)
    google_maps_url = Column(Text, nullable=False, default="")
    lat = Column(Float, nullable=True)
    lng = Column(Float, nullable=True)
    schedule = Column(StringList, nullable=False, default=list)       # Morning, Afternoon, ...
    course_types = Column(StringList, nullable=False, default=list)   # JLPT N5 ... N1
    custom_courses = Column(StringList, nullable=False, default=list)
    images = Column(StringList, nullable=False, default=list)
    description = Column(Text, nullable=True)
