"""
columns.py — Column Catalog
===========================
The fixed, ordered list of columns the filter panel offers, and the
columns the node tables show before anyone has committed a filter.
"""

from typing import Tuple


# ---------------------------------------------------------------------------
# Selectable columns (one checkbox each, in display order)
# ---------------------------------------------------------------------------
COLUMN_OPTIONS: Tuple[str, ...] = (
    "Access modes",
    "Iqn",
    "Logical Sector Size",
    "Lowest Temperature",
    "Model",
    "Percent Endurance Used",
    "Physical Sector Size",
    "Provisioner",
    "Replication Factor",
    "Rotation Rate",
    "Serial",
    "Storage class",
    "Storage driver",
    "Total Bytes Written",
    "Type",
    "Vendor",
    "Volume",
    "Iops(R)",
    "Iops(W)",
    "Latency(R)",
    "Latency(W)",
    "Throughput(R)",
    "Throughput(W)",
)


# ---------------------------------------------------------------------------
# Always-shown columns (seed for the committed list)
# ---------------------------------------------------------------------------
DEFAULT_COLUMNS: Tuple[str, ...] = (
    "docker_container_ports",
    "Current Temperature",
    "Device Utilization Rate",
    "docker_container_id",
    "docker_image_id",
    "docker_container_command",
    "docker_container_networks",
    "Firmware Revision",
    "Memory",
    "Load (1m)",
    "CPU",
    "Highest Temperature",
    "Capacity",
    "State",
    "Volume claim",
    "Status",
    "# Threads",
    "Command",
    "PID",
    "Parent PID",
    "Created",
    "IPs",
    "Image name",
    "Image tag",
    "Restart #",
    "Uptime",
    "IP",
    "Namespace",
    "Observed gen.",
)
