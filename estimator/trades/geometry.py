"""
Room geometry: wall, ceiling and opening square footage.

Rooms are measured in feet + inches; openings (doors, windows) in inches.
Every reported area is rounded to cents, and totals across rooms add up
the rounded per-room values.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from estimator.trades.shared import round_money

RoomShape = Literal["rectangular", "l_shape", "custom"]
SheetSize = Literal["4x8", "4x10", "4x12"]


def feet_inches_to_feet(feet: float, inches: float) -> float:
    return feet + inches / 12


def opening_sqft(width_inches: float, height_inches: float) -> float:
    """Area of one opening, 144 square inches per square foot."""
    return width_inches * height_inches / 144


class Opening(BaseModel):
    """A door or window cut out of the wall area."""

    preset_id: str = "custom"
    label: str = ""
    width: float = Field(ge=0)  # inches
    height: float = Field(ge=0)  # inches
    quantity: int = Field(default=1, ge=0)

    @property
    def sqft(self) -> float:
        return round_money(opening_sqft(self.width, self.height))

    @property
    def total_sqft(self) -> float:
        return round_money(opening_sqft(self.width, self.height) * self.quantity)


class LShapeDimensions(BaseModel):
    main_length_feet: int = Field(default=12, ge=0)
    main_length_inches: int = Field(default=0, ge=0, le=11)
    main_width_feet: int = Field(default=10, ge=0)
    main_width_inches: int = Field(default=0, ge=0, le=11)
    ext_length_feet: int = Field(default=8, ge=0)
    ext_length_inches: int = Field(default=0, ge=0, le=11)
    ext_width_feet: int = Field(default=6, ge=0)
    ext_width_inches: int = Field(default=0, ge=0, le=11)


class WallSegment(BaseModel):
    label: str = ""
    length_feet: int = Field(default=0, ge=0)
    length_inches: int = Field(default=0, ge=0, le=11)


class Room(BaseModel):
    """Room measurements as entered by the contractor."""

    name: str = "Room 1"
    shape: RoomShape = "rectangular"
    length_feet: int = Field(default=12, ge=0)
    length_inches: int = Field(default=0, ge=0, le=11)
    width_feet: int = Field(default=10, ge=0)
    width_inches: int = Field(default=0, ge=0, le=11)
    height_feet: int = Field(default=8, ge=0)
    height_inches: int = Field(default=0, ge=0, le=11)
    l_shape_dimensions: Optional[LShapeDimensions] = None
    custom_walls: Optional[List[WallSegment]] = None
    custom_ceiling_sqft: Optional[float] = Field(default=None, ge=0)
    include_ceiling: bool = True
    doors: List[Opening] = Field(default_factory=list)
    windows: List[Opening] = Field(default_factory=list)

    @property
    def height(self) -> float:
        return feet_inches_to_feet(self.height_feet, self.height_inches)


class RoomSqft(BaseModel):
    gross_wall_sqft: float = 0
    wall_sqft: float = 0  # net of openings
    ceiling_sqft: float = 0
    openings_sqft: float = 0
    gross_total_sqft: float = 0
    total_sqft: float = 0


class RoomsTotals(BaseModel):
    total_gross_wall_sqft: float = 0
    total_wall_sqft: float = 0
    total_ceiling_sqft: float = 0
    total_openings_sqft: float = 0
    gross_grand_total_sqft: float = 0
    grand_total_sqft: float = 0


def l_shape_walls(dims: LShapeDimensions, height: float) -> float:
    """
    Wall area of an L-shaped room.

    The perimeter is the four outer runs plus the two inner-corner runs;
    an inner run can never be negative.
    """
    main_length = feet_inches_to_feet(dims.main_length_feet, dims.main_length_inches)
    main_width = feet_inches_to_feet(dims.main_width_feet, dims.main_width_inches)
    ext_length = feet_inches_to_feet(dims.ext_length_feet, dims.ext_length_inches)
    ext_width = feet_inches_to_feet(dims.ext_width_feet, dims.ext_width_inches)

    perimeter = (
        main_length
        + main_width
        + ext_length
        + ext_width
        + max(0.0, main_width - ext_width)
        + max(0.0, main_length - ext_length)
    )
    return perimeter * height


def l_shape_ceiling(dims: LShapeDimensions) -> float:
    main_length = feet_inches_to_feet(dims.main_length_feet, dims.main_length_inches)
    main_width = feet_inches_to_feet(dims.main_width_feet, dims.main_width_inches)
    ext_length = feet_inches_to_feet(dims.ext_length_feet, dims.ext_length_inches)
    ext_width = feet_inches_to_feet(dims.ext_width_feet, dims.ext_width_inches)
    return main_length * main_width + ext_length * ext_width


def custom_walls_sqft(walls: List[WallSegment], height: float) -> float:
    return sum(feet_inches_to_feet(w.length_feet, w.length_inches) * height for w in walls)


def calculate_room_sqft(room: Room) -> RoomSqft:
    """
    Calculate wall, ceiling and opening areas for one room.

    Args:
        room: Room measurements

    Returns:
        Gross and net (after openings) areas, rounded to cents
    """
    wall_area = 0.0
    ceiling_area = 0.0
    height = room.height

    if room.shape == "l_shape":
        if room.l_shape_dimensions is not None:
            wall_area = l_shape_walls(room.l_shape_dimensions, height)
            if room.include_ceiling:
                ceiling_area = l_shape_ceiling(room.l_shape_dimensions)
    elif room.shape == "custom":
        if room.custom_walls:
            wall_area = custom_walls_sqft(room.custom_walls, height)
        if room.include_ceiling and room.custom_ceiling_sqft is not None:
            ceiling_area = room.custom_ceiling_sqft
    else:
        length = feet_inches_to_feet(room.length_feet, room.length_inches)
        width = feet_inches_to_feet(room.width_feet, room.width_inches)
        wall_area = 2 * (length + width) * height
        if room.include_ceiling:
            ceiling_area = length * width

    openings = sum(o.total_sqft for o in room.doors) + sum(o.total_sqft for o in room.windows)
    net_wall_area = max(0.0, wall_area - openings)

    return RoomSqft(
        gross_wall_sqft=round_money(wall_area),
        wall_sqft=round_money(net_wall_area),
        ceiling_sqft=round_money(ceiling_area),
        openings_sqft=round_money(openings),
        gross_total_sqft=round_money(wall_area + ceiling_area),
        total_sqft=round_money(net_wall_area + ceiling_area),
    )


def calculate_rooms_totals(rooms: List[Room]) -> RoomsTotals:
    """Sum the rounded per-room areas across rooms."""
    gross_wall = wall = ceiling = openings = 0.0
    for room in rooms:
        calculated = calculate_room_sqft(room)
        gross_wall += calculated.gross_wall_sqft
        wall += calculated.wall_sqft
        ceiling += calculated.ceiling_sqft
        openings += calculated.openings_sqft

    return RoomsTotals(
        total_gross_wall_sqft=round_money(gross_wall),
        total_wall_sqft=round_money(wall),
        total_ceiling_sqft=round_money(ceiling),
        total_openings_sqft=round_money(openings),
        gross_grand_total_sqft=round_money(gross_wall + ceiling),
        grand_total_sqft=round_money(wall + ceiling),
    )


def suggest_sheet_size(height_feet: float, height_inches: float) -> SheetSize:
    """Pick the sheet length that covers the wall height with fewest seams."""
    height = feet_inches_to_feet(height_feet, height_inches)
    if height <= 8:
        return "4x8"
    if height <= 9:
        return "4x10"
    return "4x12"


class RoomOverride(BaseModel):
    """Per-trade adjustments to a shared project room."""

    include_ceiling: Optional[bool] = None
    include_walls: bool = True
    excluded: bool = False


class TradeRoomView(BaseModel):
    """A room as one trade sees it, after its override is applied."""

    name: str
    trade_type: str
    include_ceiling: bool
    include_walls: bool
    excluded: bool
    wall_sqft: float
    ceiling_sqft: float
    effective_wall_sqft: float
    effective_ceiling_sqft: float
    effective_total_sqft: float


def trade_room_view(
    name: str,
    sqft: RoomSqft,
    trade_type: str,
    override: Optional[RoomOverride] = None,
    default_include_ceiling: bool = True,
) -> TradeRoomView:
    """Apply a trade override to a room's areas; excluded rooms count as zero."""
    override = override or RoomOverride()
    include_ceiling = default_include_ceiling if override.include_ceiling is None else override.include_ceiling

    effective_wall = 0.0 if override.excluded or not override.include_walls else sqft.wall_sqft
    effective_ceiling = 0.0 if override.excluded or not include_ceiling else sqft.ceiling_sqft

    return TradeRoomView(
        name=name,
        trade_type=trade_type,
        include_ceiling=include_ceiling,
        include_walls=override.include_walls,
        excluded=override.excluded,
        wall_sqft=sqft.wall_sqft,
        ceiling_sqft=sqft.ceiling_sqft,
        effective_wall_sqft=effective_wall,
        effective_ceiling_sqft=effective_ceiling,
        effective_total_sqft=effective_wall + effective_ceiling,
    )
