from .partition import Partition
from .seed import partition_from_colors, degree_partition, equitable_partition

__all__ = [
    "Partition",
    "partition_from_colors",
    "degree_partition",
    "equitable_partition",
]
