from sqlalchemy import Column, Integer, String, Date, DateTime, Boolean

from ..core.database import Base

class Patient(Base):
    __tablename__ = "patients"
    
    id = Column(Integer, primary_key=True, index=True)
    
    # Personal information
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    date_of_birth = Column(Date, nullable=False)
    
    # Contact information
    email = Column(String(255), nullable=True)
    phone_number = Column(String(20), nullable=True)
    
    # Timestamps
    created_at = Column(DateTime, nullable=False)
    
    # Soft delete; rows are never removed
    is_deleted = Column(Boolean, nullable=False, default=False, index=True)
    
    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
    
    def __repr__(self):
        return f"<Patient(id={self.id}, name='{self.first_name} {self.last_name}', deleted={self.is_deleted})>"
