# jobly/models/job.py
from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, String, Text

from jobly.models.base import Base


class Job(Base):
    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(Text, nullable=False)
    salary = Column(Integer, nullable=True)
    # decimal string in [0, 1], e.g. "0", "0.25", ".5"
    equity = Column(Text, nullable=True)
    company_handle = Column(
        String(25),
        ForeignKey("companies.handle", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    __table_args__ = (
        CheckConstraint("salary >= 0", name="ck_jobs_salary"),
    )
