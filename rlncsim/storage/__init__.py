"""Per-node in-memory storage and the shred encoder, decoder and recoder that work on it."""