"""
Data models for the Zooscape game state

Snapshot shape (starter bot JSON):
{
    "Tick": 42,
    "Cells": [{"X": 0, "Y": 0, "Content": "Wall"}, ...],
    "Animals": [{"Id": "...", "X": 3, "Y": 4, "HeldPowerUp": null}, ...],
    "Zookeepers": [{"Id": "...", "X": 10, "Y": 10}, ...]
}

Content may be sent as the tag name or as its index in CellContent order.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

Coord = Tuple[int, int]


class CellContent(str, Enum):
    """What occupies a grid cell (declaration order matches the game enum)"""
    EMPTY = "Empty"
    WALL = "Wall"
    PELLET = "Pellet"
    ZOOKEEPER_SPAWN = "ZookeeperSpawn"
    ANIMAL_SPAWN = "AnimalSpawn"
    POWER_PELLET = "PowerPellet"
    CHAMELEON_CLOAK = "ChameleonCloak"
    SCAVENGER = "Scavenger"
    BIG_MOOSE_JUICE = "BigMooseJuice"


POWER_UP_CONTENTS = frozenset({
    CellContent.POWER_PELLET,
    CellContent.CHAMELEON_CLOAK,
    CellContent.SCAVENGER,
    CellContent.BIG_MOOSE_JUICE,
})


class BotAction(Enum):
    """Command sent back to the game each tick"""
    UP = "Up"
    DOWN = "Down"
    LEFT = "Left"
    RIGHT = "Right"
    USE_ITEM = "UseItem"

    @property
    def is_move(self) -> bool:
        return self is not BotAction.USE_ITEM


@dataclass(frozen=True)
class BotCommand:
    """Single command emitted for a tick"""
    action: BotAction


class _SnapshotModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class Cell(_SnapshotModel):
    """Grid cell with its content tag"""
    x: int = Field(alias="X")
    y: int = Field(alias="Y")
    content: CellContent = Field(default=CellContent.EMPTY, alias="Content")

    @field_validator("content", mode="before")
    @classmethod
    def _content_from_index(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            members = list(CellContent)
            if 0 <= value < len(members):
                return members[value]
        return value

    @property
    def pos(self) -> Coord:
        return (self.x, self.y)


class Animal(_SnapshotModel):
    """Animal on the grid; one of them is ours"""
    id: str = Field(alias="Id")
    x: int = Field(alias="X")
    y: int = Field(alias="Y")
    held_power_up: Optional[str] = Field(default=None, alias="HeldPowerUp")

    @field_validator("id", mode="before")
    @classmethod
    def _id_to_str(cls, value: Any) -> Any:
        # GUIDs arrive as strings, but uuid.UUID instances are handy in tests
        return str(value) if value is not None else value

    @property
    def pos(self) -> Coord:
        return (self.x, self.y)


class Zookeeper(_SnapshotModel):
    """Adversary chasing the animals"""
    id: Optional[str] = Field(default=None, alias="Id")
    x: int = Field(alias="X")
    y: int = Field(alias="Y")

    @property
    def pos(self) -> Coord:
        return (self.x, self.y)


class WorldSnapshot(_SnapshotModel):
    """Full game state delivered once per tick"""
    tick: int = Field(default=0, alias="Tick")
    cells: List[Cell] = Field(default_factory=list, alias="Cells")
    animals: List[Animal] = Field(default_factory=list, alias="Animals")
    zookeepers: List[Zookeeper] = Field(default_factory=list, alias="Zookeepers")

    def find_animal(self, animal_id: Optional[str]) -> Optional[Animal]:
        """Animal with the given identity, if it is on the board"""
        if animal_id is None:
            return None
        wanted = str(animal_id)
        for animal in self.animals:
            if animal.id == wanted:
                return animal
        return None


def parse_game_state(data: Dict[str, Any]) -> WorldSnapshot:
    """
    Parse a game state payload into a WorldSnapshot.

    Raises pydantic.ValidationError if the payload is malformed.
    """
    return WorldSnapshot.model_validate(data)
