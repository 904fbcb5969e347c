from sqlalchemy import Column, Integer, String, Text
# relationship not used; nested recipe parts are stored as JSON text
from .db import Base


class Recipe(Base):
    __tablename__ = "recipes"
    id = Column(String(36), primary_key=True, index=True)
    slug = Column(String(200), index=True, nullable=False)
    # not unique: a duplicate import may be kept as an independent record
    name = Column(String(200), index=True, nullable=False)
    description = Column(Text, nullable=True)
    image = Column(String(1024), nullable=True)  # local file path
    rating = Column(Integer, nullable=True)
    recipe_yield = Column(String(200), nullable=True)
    prep_time = Column(String(64), nullable=True)
    perform_time = Column(String(64), nullable=True)
    total_time = Column(String(64), nullable=True)
    org_url = Column(String(2048), index=True, nullable=True)

    recipe_category = Column(Text, nullable=True)  # JSON-encoded list
    tags = Column(Text, nullable=True)  # JSON-encoded list
    tools = Column(Text, nullable=True)  # JSON-encoded list
    recipe_ingredient = Column(Text, nullable=True)  # JSON-encoded list
    recipe_instructions = Column(Text, nullable=True)  # JSON-encoded list
    nutrition = Column(Text, nullable=True)  # JSON-encoded object
    settings = Column(Text, nullable=True)  # JSON-encoded object
    extras = Column(Text, nullable=True)  # JSON-encoded object

    date_added = Column(String(64), nullable=True)
    date_updated = Column(String(64), nullable=True)
    created_at = Column(String(64), nullable=True)
    updated_at = Column(String(64), nullable=True)


class Favorite(Base):
    __tablename__ = "favorites"
    # one row per favorited recipe slug
    slug = Column(String(200), primary_key=True)
    created_at = Column(String(64), nullable=True)
