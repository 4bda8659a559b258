from sqlalchemy import Column, Float, Integer, Text
from sqlalchemy.orm import relationship
from marketplace.database import Base


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(Text, primary_key=True)
    email = Column(Text, nullable=False, unique=True)
    full_name = Column(Text, nullable=False)
    passphrase_hash = Column(Text, nullable=False)
    # NULL means the profile has no reviews yet, which is not the same as 0.
    rating = Column(Float)
    total_reviews = Column(Integer, nullable=False, default=0)
    created_at = Column(Text, nullable=False)

    jobs = relationship("Job", back_populates="poster")
    applications = relationship("Application", back_populates="applicant")
