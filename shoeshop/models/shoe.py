# shoeshop/models/shoe.py
from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, Numeric, String, UniqueConstraint
from sqlalchemy.orm import relationship

from shoeshop.core.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Shoe(Base):
    __tablename__ = "shoes"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, index=True)
    brand = Column(String(100), nullable=False, index=True)
    size = Column(String(50), nullable=False)
    base_color = Column(String(30), nullable=False)
    current_color = Column(String(30))
    price = Column(Numeric(18, 2), nullable=False)
    description = Column(String(500))
    image_url = Column(String(200))
    is_available = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True))

    # Relationships
    variations = relationship(
        "ShoeColorVariation",
        back_populates="shoe",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="ShoeColorVariation.id",
    )

    def __repr__(self):
        return f"<Shoe id={self.id} name={self.name!r} brand={self.brand!r}>"


class ShoeColorVariation(Base):
    __tablename__ = "shoe_color_variations"

    id = Column(Integer, primary_key=True, index=True)
    shoe_id = Column(Integer, ForeignKey("shoes.id"), nullable=False, index=True)
    color_name = Column(String(30), nullable=False)
    hex_code = Column(String(7), nullable=False)
    stock_quantity = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    # Relationships
    shoe = relationship("Shoe", back_populates="variations")

    # Constraint
    __table_args__ = (
        UniqueConstraint("shoe_id", "color_name", name="_shoe_color_unique"),
    )

    def __repr__(self):
        return f"<ShoeColorVariation id={self.id} shoe_id={self.shoe_id} color={self.color_name!r}>"
