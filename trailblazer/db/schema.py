"""Table definitions for the relational store."""

from sqlalchemy import (
    BigInteger,
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
    func,
)

metadata = MetaData()

users = Table(
    "users",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("username", String(50), nullable=False, unique=True),
    Column("email", String(200), nullable=False),
    Column("password_hash", Text, nullable=False),
    Column("first_name", String(100), nullable=False),
    Column("created_at", DateTime, server_default=func.now()),
)

trips = Table(
    "trips",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True),
    Column("trip_name", String(200), nullable=False),
    Column("start_date", Date, nullable=False),
    Column("end_date", Date, nullable=False),
    Column("location_city", String(200), nullable=False),
    Column("location_country", String(200), nullable=False),
    Column("interests", Text, nullable=False),
    Column("created_at", DateTime, server_default=func.now()),
    UniqueConstraint("user_id", "trip_name", name="uq_trips_user_id_trip_name"),
)

# One snapshot per trip. ``message`` is only set when the country lookup
# failed and the placeholder was stored instead of real facts.
destinations = Table(
    "destinations",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("trip_id", Integer, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, unique=True),
    Column("country", String(200), nullable=False),
    Column("city", String(200)),
    Column("common_name", String(200)),
    Column("official_name", String(300)),
    Column("capital_city", String(200)),
    Column("currencies", Text),
    Column("languages", Text),
    Column("region", String(100)),
    Column("subregion", String(100)),
    Column("population", BigInteger),
    Column("timezones", Text),
    Column("flag", Text),
    Column("google_maps", Text),
    Column("car_side", String(20)),
    Column("car_signs", Text),
    Column("start_of_week", String(20)),
    Column("independent", Boolean),
    Column("un_member", Boolean),
    Column("alt_spellings", Text),
    Column("borders", Text),
    Column("message", Text),
)

weather = Table(
    "weather",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("trip_id", Integer, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, index=True),
    Column("date", Date, nullable=False),
    Column("temp_max", Float),
    Column("temp_min", Float),
    Column("temp", Float),
    Column("humidity", Float),
    Column("precipitation", Float),
    Column("precip_prob", Float),
    Column("wind_speed", Float),
    Column("sunrise", String(20)),
    Column("sunset", String(20)),
    Column("conditions", String(200)),
    Column("description", Text),
    Column("icon", String(100)),
)

itineraries = Table(
    "itineraries",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("trip_id", Integer, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, unique=True),
    Column("text", Text, nullable=False),
)
