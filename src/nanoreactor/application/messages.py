"""
Pydantic models for the command channel.

All validation, field constraints, and serialisation logic for channel
messages lives here. Commands arrive as plain dicts with a ``type``
discriminator; events leave as plain dicts with camelCase keys.
"""
from __future__ import annotations

from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator
from pydantic.alias_generators import to_camel

from nanoreactor.core import Atom, Snapshot
from nanoreactor.core.element_registry import elements as element_registry


# ------------------------------------------------------------------ #
#  Payload models
# ------------------------------------------------------------------ #


class AtomModel(BaseModel):
    """One input atom."""

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    element: str
    position: List[float] = Field(min_length=3, max_length=3)
    velocity: List[float] = Field(
        default_factory=lambda: [0.0, 0.0, 0.0], min_length=3, max_length=3
    )
    mass: Optional[float] = Field(None, gt=0, description="Mass in amu")
    id: int = -1

    @field_validator("element")
    @classmethod
    def element_must_be_supported(cls, v: str) -> str:
        if v not in element_registry:
            raise ValueError(
                f"Unsupported element '{v}'. Choose from: {', '.join(element_registry.symbols())}"
            )
        return v

    def to_atom(self) -> Atom:
        return Atom(
            element=self.element,
            position=self.position,
            velocity=self.velocity,
            mass=self.mass,
            id=self.id,
        )


class ConfigModel(BaseModel):
    """Full or partial simulation configuration.

    Unset fields stay ``None`` and are left untouched when merged.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True, allow_inf_nan=False)

    dt: Optional[float] = Field(None, gt=0, description="Timestep in fs")
    target_temperature: Optional[float] = Field(None, ge=0, alias="targetTemp")
    confinement_radius: Optional[float] = Field(None, gt=0, alias="confinementRadius")
    confinement_force: Optional[float] = Field(None, ge=0, alias="confinementForce")
    thermostat_tau: Optional[float] = Field(None, ge=0, alias="thermostatTau")
    steps_per_update: Optional[int] = Field(None, ge=1, alias="stepsPerUpdate")
    max_displacement: Optional[float] = Field(None, gt=0, alias="maxDisplacement")

    def to_partial(self) -> Dict[str, Any]:
        """Changed fields only, keyed by SimConfig field name."""
        return self.model_dump(exclude_none=True)


# ------------------------------------------------------------------ #
#  Commands
# ------------------------------------------------------------------ #


class InitCommand(BaseModel):
    type: Literal["INIT"]
    atoms: List[AtomModel]
    config: ConfigModel = Field(default_factory=ConfigModel)


class StartCommand(BaseModel):
    type: Literal["START"]


class StopCommand(BaseModel):
    type: Literal["STOP"]


class StepCommand(BaseModel):
    type: Literal["STEP"]


class UpdateConfigCommand(BaseModel):
    type: Literal["UPDATE_CONFIG"]
    config: ConfigModel


class ResetCommand(BaseModel):
    type: Literal["RESET"]
    atoms: List[AtomModel]
    config: ConfigModel = Field(default_factory=ConfigModel)


Command = Annotated[
    Union[
        InitCommand,
        StartCommand,
        StopCommand,
        StepCommand,
        UpdateConfigCommand,
        ResetCommand,
    ],
    Field(discriminator="type"),
]

command_adapter: TypeAdapter = TypeAdapter(Command)


def parse_command(message: Dict[str, Any]) -> Any:
    """Validate a raw message dict into one of the command models."""
    return command_adapter.validate_python(message)


# ------------------------------------------------------------------ #
#  Events
# ------------------------------------------------------------------ #


class _Event(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class BondPayload(BaseModel):
    i: int
    j: int
    order: int
    length: float


class SpeciesPayload(BaseModel):
    formula: str
    count: int


class StateUpdateEvent(_Event):
    """Snapshot of the engine, by value."""

    type: Literal["STATE_UPDATE"] = "STATE_UPDATE"
    positions: List[List[float]]
    forces: List[List[float]]
    elements: List[str]
    bonds: List[BondPayload]
    species: List[SpeciesPayload]
    temperature: float
    kinetic_energy: float
    potential_energy: float
    total_energy: float
    step: int
    time: float
    steps_per_second: float

    @classmethod
    def from_snapshot(cls, snapshot: Snapshot) -> "StateUpdateEvent":
        return cls(
            positions=snapshot.positions.tolist(),
            forces=snapshot.forces.tolist(),
            elements=list(snapshot.elements),
            bonds=[BondPayload(**b.to_dict()) for b in snapshot.bonds],
            species=[SpeciesPayload(**s.to_dict()) for s in snapshot.species],
            temperature=snapshot.temperature,
            kinetic_energy=snapshot.kinetic_energy,
            potential_energy=snapshot.potential_energy,
            total_energy=snapshot.total_energy,
            step=snapshot.step,
            time=snapshot.time,
            steps_per_second=snapshot.steps_per_second,
        )


class ReadyEvent(_Event):
    type: Literal["READY"] = "READY"


class ErrorEvent(_Event):
    type: Literal["ERROR"] = "ERROR"
    message: str
