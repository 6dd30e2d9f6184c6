from models.individual import Individual
from models.grid import GridDescriptor
from models.cohort import Group, Classification
from models.allocation import (
    Allocation, GridReport, Placement, SeatMatrix, UnplacedSummary, new_seat_matrix,
)
