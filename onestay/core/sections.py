"""
Guest-book sections of a property.

Each section can be switched on or off by the host. When a property is
created without a section, it gets that section's disabled default.
JSON field names are camelCase.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model exchanging camelCase JSON, accepting snake_case too."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Section(CamelModel):
    enabled: bool = False


# =============================================================================
# Arrival & access
# =============================================================================


class CheckInOut(Section):
    check_in_time: str = ""  # "HH:mm"
    check_out_time: str = ""  # "HH:mm"
    self_check_in: bool = False
    early_check_in: bool = False
    late_check_out: bool = False
    check_in_instructions: str | None = None
    check_out_instructions: str | None = None
    key_location: str | None = None
    access_code: str | None = None
    lockbox_code: str | None = None
    building_code: str | None = None
    intercom_code: str | None = None
    parking_code: str | None = None
    gate_code: str | None = None


class Wifi(Section):
    network_name: str | None = None
    password: str | None = None
    router_location: str | None = None
    reset_instructions: str | None = None
    notes: str | None = None


# =============================================================================
# Inside the property
# =============================================================================


class EquipmentItem(CamelModel):
    id: str
    name: str
    category: str  # bedroom, bathroom, kitchen, living, outdoor, baby, work, other


class Equipment(Section):
    items: list[EquipmentItem] = Field(default_factory=list)


class InstructionItem(CamelModel):
    enabled: bool = False
    content: str | None = None


class Instructions(Section):
    trash: InstructionItem | None = None
    heating: InstructionItem | None = None
    air_conditioning: InstructionItem | None = None
    hot_water: InstructionItem | None = None
    appliances: InstructionItem | None = None
    laundry: InstructionItem | None = None
    dishwasher: InstructionItem | None = None
    oven: InstructionItem | None = None
    coffee_machine: InstructionItem | None = None
    television: InstructionItem | None = None
    sound: InstructionItem | None = None
    blinds: InstructionItem | None = None
    alarm: InstructionItem | None = None
    safe: InstructionItem | None = None
    pool: InstructionItem | None = None
    spa: InstructionItem | None = None
    garden: InstructionItem | None = None
    barbecue: InstructionItem | None = None
    fireplace: InstructionItem | None = None
    other: InstructionItem | None = None


class Rules(Section):
    smoking_allowed: bool = False
    pets_allowed: bool = False
    parties_allowed: bool = False
    children_allowed: bool = True
    max_guests: int | None = None
    quiet_hours: str | None = None
    house_rules: list[str] = Field(default_factory=list)
    additional_rules: str | None = None


# =============================================================================
# People & places
# =============================================================================


class Contact(CamelModel):
    id: str
    type: str  # host, concierge, cleaning, maintenance, emergency, neighbor, other
    name: str
    phone: str
    email: str | None = None
    notes: str | None = None


class Contacts(Section):
    contacts: list[Contact] = Field(default_factory=list)


class Recommendation(CamelModel):
    id: str
    category: str  # restaurant, cafe, bar, bakery, grocery, market, pharmacy, ...
    name: str
    description: str | None = None
    address: str | None = None
    phone: str | None = None
    website: str | None = None
    distance: str | None = None
    rating: float | None = Field(default=None, ge=1, le=5)


class LocalRecommendations(Section):
    recommendations: list[Recommendation] = Field(default_factory=list)


class Parking(Section):
    available: bool = False
    type: str | None = None  # street, garage, driveway, private, public
    free: bool = False
    price: str | None = None
    instructions: str | None = None
    access_code: str | None = None


class Transport(Section):
    nearest_bus: str | None = None
    nearest_metro: str | None = None
    nearest_train: str | None = None
    nearest_tram: str | None = None
    taxi_info: str | None = None
    bike_rental: str | None = None
    car_rental: str | None = None
    airport_shuttle: str | None = None
    walking_info: str | None = None


# =============================================================================
# Safety & services
# =============================================================================


class Security(Section):
    has_alarm: bool = False
    alarm_code: str | None = None
    alarm_instructions: str | None = None
    has_safe: bool = False
    safe_code: str | None = None
    safe_location: str | None = None
    has_fire_extinguisher: bool = False
    fire_extinguisher_location: str | None = None
    has_first_aid_kit: bool = False
    first_aid_kit_location: str | None = None
    has_smoke_detector: bool = False
    has_carbon_monoxide_detector: bool = False
    security_notes: str | None = None


class Services(Section):
    linens_included: bool = False
    towels_included: bool = False
    toiletry_included: bool = False
    cleaning_included: bool = False
    cleaning_frequency: str | None = None
    breakfast_included: bool = False
    breakfast_details: str | None = None
    concierge_service: str | None = None
    grocery_delivery: str | None = None
    luggage_storage: bool = False
    laundry_service: bool = False


class BabyKids(Section):
    has_crib: bool = False
    has_high_chair: bool = False
    has_baby_gate: bool = False
    has_child_proofing: bool = False
    kids_toys_available: bool = False
    nearby_playgrounds: str | None = None
    babysitter_contact: str | None = None
    additional_info: str | None = None


class Pets(Section):
    pets_allowed: bool = False
    pet_fee: str | None = None
    pet_rules: str | None = None
    dog_walking_areas: str | None = None
    nearby_vet: str | None = None
    nearby_pet_store: str | None = None
    pet_equipment_available: str | None = None


class Entertainment(Section):
    has_tv: bool = False
    tv_channels: str | None = None
    has_netflix: bool = False
    netflix_instructions: str | None = None
    has_spotify: bool = False
    spotify_instructions: str | None = None
    has_game_console: bool = False
    game_console_details: str | None = None
    board_games: str | None = None
    books: str | None = None


class Outdoor(Section):
    has_garden: bool = False
    garden_info: str | None = None
    has_terrace: bool = False
    terrace_info: str | None = None
    has_balcony: bool = False
    balcony_info: str | None = None
    has_pool: bool = False
    pool_info: str | None = None
    pool_rules: str | None = None
    has_spa: bool = False
    spa_info: str | None = None
    has_barbecue: bool = False
    barbecue_info: str | None = None


class Neighborhood(Section):
    description: str | None = None
    noise_level: str | None = None  # quiet, moderate, lively
    neighbor_info: str | None = None
    nearby_attractions: str | None = None
    safety_tips: str | None = None


class Emergency(Section):
    emergency_number: str | None = None  # 112 in the EU
    police_number: str | None = None
    fire_number: str | None = None
    ambulance_number: str | None = None
    nearest_hospital: str | None = None
    nearest_hospital_address: str | None = None
    nearest_pharmacy: str | None = None
    nearest_pharmacy_hours: str | None = None
    doctor_on_call: str | None = None
    additional_emergency_info: str | None = None


# =============================================================================
# Registry
# =============================================================================


# field name on Property -> section model
SECTION_TYPES: dict[str, type[Section]] = {
    "check_in_out": CheckInOut,
    "wifi": Wifi,
    "equipment": Equipment,
    "instructions": Instructions,
    "rules": Rules,
    "contacts": Contacts,
    "local_recommendations": LocalRecommendations,
    "parking": Parking,
    "transport": Transport,
    "security": Security,
    "services": Services,
    "baby_kids": BabyKids,
    "pets": Pets,
    "entertainment": Entertainment,
    "outdoor": Outdoor,
    "neighborhood": Neighborhood,
    "emergency": Emergency,
}
