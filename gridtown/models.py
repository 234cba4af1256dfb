"""Vehicle model assets."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class VehicleModelData:
    """Asset paths for a vehicle's mesh and material, with its scale and height offset."""

    mesh: str
    material: str
    scale: float
    vertical_offset: float

    @classmethod
    def from_voxcar(cls, number: int, scale: float, vertical_offset: float) -> VehicleModelData:
        return cls(
            mesh=f"models/voxcar-{number}.gltf#Mesh0/Primitive0",
            material=f"models/voxcar-{number}.gltf#Material0",
            scale=scale,
            vertical_offset=vertical_offset,
        )


def default_vehicle_models() -> list[VehicleModelData]:
    """The five voxcar models vehicles are drawn from."""
    return [
        VehicleModelData.from_voxcar(1, 1.0, 0.0),
        VehicleModelData.from_voxcar(2, 1.0, 0.0),
        VehicleModelData.from_voxcar(3, 1.5, 0.2),
        VehicleModelData.from_voxcar(4, 1.2, 0.01),
        VehicleModelData.from_voxcar(5, 1.0, 0.0),
    ]