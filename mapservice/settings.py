# Settings for the chunk request layer

# Tiles per chunk edge. Must match the generator's chunk size.
CHUNK_SIZE = 16

# Inclusive range accepted for chunk coordinates on both axes
MIN_CHUNK_COORD = -10_000
MAX_CHUNK_COORD = 10_000

# Seed used by the command line when none is given
DEFAULT_SEED = 12345

# Upper bound on the encoded size of one batch response, in bytes
MAX_PAYLOAD_BYTES = 6 * 1024 * 1024

# Largest number of chunks a single batch request may ask for
MAX_BATCH_CHUNKS = 64
