DEFAULT_BLOCK_CONFIDENCE_THRESHOLD = 0.92
DEFAULT_REPLICATION_FACTOR = 5
DEFAULT_QUERY_TIMEOUT = 10  # seconds

# Maintenance intervals (in blocks)
DEFAULT_PRUNING_INTERVAL = 180
DEFAULT_TELEMETRY_FLUSH_INTERVAL = 15

# Block event channel capacity before slow receivers start lagging
DEFAULT_EVENT_CAPACITY = 1024

METRICS_JOB_NAME = "light_node"
