from sqlalchemy import Column, Integer, ForeignKey, Time, Enum as SQLEnum
import enum

from ..core.database import Base

class DayOfWeek(str, enum.Enum):
    SUNDAY = "Sunday"
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"

class DoctorSchedule(Base):
    __tablename__ = "doctor_schedules"
    
    id = Column(Integer, primary_key=True, index=True)
    doctor_id = Column(Integer, ForeignKey("doctors.id"), nullable=False, index=True)
    
    # Weekly availability window
    day_of_week = Column(SQLEnum(DayOfWeek), nullable=False)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    
    def __repr__(self):
        return (
            f"<DoctorSchedule(id={self.id}, doctor_id={self.doctor_id}, "
            f"day='{self.day_of_week}', {self.start_time}-{self.end_time})>"
        )
