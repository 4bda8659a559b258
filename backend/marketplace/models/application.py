from sqlalchemy import Column, Float, ForeignKey, Text
from sqlalchemy.orm import relationship
from marketplace.database import Base


class Application(Base):
    __tablename__ = "applications"

    id = Column(Text, primary_key=True)
    job_id = Column(Text, ForeignKey("jobs.id"), nullable=False)
    applicant_id = Column(Text, ForeignKey("profiles.id"), nullable=False)
    message = Column(Text, nullable=False)
    proposed_rate = Column(Float)
    status = Column(Text, nullable=False, default="pending")
    applied_at = Column(Text, nullable=False)
    decided_at = Column(Text)

    job = relationship("Job", back_populates="applications")
    applicant = relationship("Profile", back_populates="applications")
