from sqlalchemy import Column, Float, ForeignKey, Text
from sqlalchemy.orm import relationship
from marketplace.database import Base


class Job(Base):
    __tablename__ = "jobs"

    id = Column(Text, primary_key=True)
    poster_id = Column(Text, ForeignKey("profiles.id"), nullable=False)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    category = Column(Text, nullable=False)
    location = Column(Text, nullable=False)
    budget = Column(Float, nullable=False)
    duration = Column(Text)
    requirements = Column(Text)
    contact_info = Column(Text)
    status = Column(Text, nullable=False, default="active")
    created_at = Column(Text, nullable=False)
    updated_at = Column(Text, nullable=False)

    poster = relationship("Profile", back_populates="jobs")
    applications = relationship("Application", back_populates="job")
