# Parametric geometry for bridge substructures
from .parameters import Parameters, InvalidParameter
from .profile import PierCapProfile, build_pier_cap_profile
from .geometry import PileGrid, ColumnSet, layout_pile_grid, layout_columns
from .alignment import PierStation, sample_alignment
from .quantities import QuantityResult, StationQuantities, calculate_quantities
from .assembler import BridgeGeometry, StationGeometry, assemble_bridge, assemble_station

__version__ = "0.1.0"
