# storefront/data/models/product.py
from sqlalchemy import Column, Integer, String, Float, Text

from storefront.data.database import Base


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=False)
    #storage order of the catalog, rewritten on every save
    position = Column(Integer, nullable=False, index=True)

    name = Column(String, nullable=False)
    price = Column(Float, nullable=False)
    category = Column(String, nullable=False, default="")
    image = Column(String, nullable=False, default="")
    description = Column(Text, nullable=False, default="")
