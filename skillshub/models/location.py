# location.py
from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship

from skillshub.db.database import Base


class RegionSL(Base):
    __tablename__ = "regions_sl"

    id = Column(Integer, primary_key=True)
    name = Column(String(100), unique=True, nullable=False)

    districts = relationship("DistrictSL", back_populates="region", order_by="DistrictSL.name")


class DistrictSL(Base):
    __tablename__ = "districts_sl"

    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False)
    region_id = Column(Integer, ForeignKey("regions_sl.id", ondelete="CASCADE"), nullable=False, index=True)

    region = relationship("RegionSL", back_populates="districts")


class Address(Base):
    __tablename__ = "addresses"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    address_line1 = Column(String(255), nullable=True)
    address_line2 = Column(String(255), nullable=True)
    city = Column(String(100), nullable=True)
    region_id = Column(Integer, ForeignKey("regions_sl.id"), nullable=True)
    district_id = Column(Integer, ForeignKey("districts_sl.id"), nullable=True)
    postal_code = Column(String(20), nullable=True)

    user = relationship("User", back_populates="addresses")
    region = relationship("RegionSL")
    district = relationship("DistrictSL")
