# rlncsim

`rlncsim` implements random linear network coding (RLNC) for spreading a block
through a peer-to-peer network. Homomorphic commitments let a receiver check
each coded piece before it uses the piece. A small in-process gossip simulator
measures how fast a block spreads and how much bandwidth is wasted on the way.

All arithmetic is pure Python.

## Contents

| Module | What it provides |
| --- | --- |
| `rlncsim.field` | `PrimeFieldElement`, and `Scalar25519`, the scalar field of the Ristretto group (`from_bytes_mod_order`, `to_bytes`). |
| `rlncsim.bls_scalar` | `BlsScalar`, BLS12-381 scalars stored as 32 big-endian bytes, and `ScalarError`. |
| `rlncsim.scalars` | Byte and scalar helpers: `chunk_to_scalars`, `block_to_chunks`, `coefficients_to_scalars`, `coefficients_to_bls_scalars`, `pad_data_for_scalars` / `unpad_data_from_scalars`, `random_u8_slice`, `create_random_block`. |
| `rlncsim.curve` | `RistrettoPoint` (identity, basepoint, `mul_base`, addition, scalar multiplication) and `multiscalar_mul`. |
| `rlncsim.coded` | `CodedPiece` (data scalars plus byte coefficients) and the abstract `Committer`. |
| `rlncsim.pedersen` | `PedersenCommitter`, which gives one Pedersen vector commitment per chunk, and `PedersenError`. |
| `rlncsim.discrete_log` | `DiscreteLogCommitter`, `DiscreteLogParams`, `find_orthogonal_vector` and `DiscreteLogError`. The committer signs the subspace spanned by the original packets. |
| `rlncsim.matrix` | `Echelon`, an incremental row echelon form used for decoding. |
| `rlncsim.rlnc` | `NetworkEncoder`, `NetworkDecoder`, `NetworkRecoder`, `generate_random_coefficients` and the `RLNCError` family. |
| `rlncsim.reed_solomon` | `ReedSolomon`, a systematic erasure encoder over GF(2^8), and `ReedSolomonError`. |
| `rlncsim.eds` | `FlatMatrix`, `create_extended_matrix` and `extended_data_share`. `extended_data_share` turns a `k x k` share matrix into `2k x 2k`. |
| `rlncsim.storage` | `InMemoryStorage`, `StorageEncoder`, `StorageDecoder` and `StorageRecoder`. |
| `rlncsim.message` | `BroadcastCodedBlockMsg` and `RetrieveShredMsg`. |
| `rlncsim.node` | `Node` and `NodeError`. |
| `rlncsim.bytesize` | `bytes_to_human_readable`. |
| `rlncsim.benchmarks` | `simulate_network`, `NetworkConfig`, `BenchmarkResult` and the command entry points. |

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Encoding, verifying and decoding a shred

```python
from rlncsim.pedersen import PedersenCommitter
from rlncsim.rlnc import NetworkDecoder, NetworkEncoder
from rlncsim.scalars import random_u8_slice

num_chunks = 10
committer = PedersenCommitter(num_chunks)
data = random_u8_slice(num_chunks * 32)

encoder = NetworkEncoder(committer, data, num_chunks)
commitment = encoder.commitment()

decoder = NetworkDecoder(committer, num_chunks)
while not decoder.is_already_decoded():
    decoder.decode(encoder.encode(), commitment, None)

assert decoder.decoded_data() == data
```

How the data is read:

- Data is read as 32-byte little-endian words, and each word is reduced modulo the group order.
- The decoded bytes therefore equal the input only when every word is already canonical.
- `random_u8_slice` and `create_random_block` produce canonical data by zeroing every 32nd byte.

`NetworkDecoder.decode` and `direct_decode` raise these errors:

| Error | When |
| --- | --- |
| `PieceNotUsefulError` | The piece is linearly dependent on pieces already held. |
| `ReceivedAllPiecesError` | The decoder is already complete. |
| `InvalidDataError` | Verification fails. |
| `LackOfCommitterError` | A piece is to be verified but no committer was given. |

`decoded_data` raises `DecodingNotCompleteError` until enough independent
pieces have arrived.

`NetworkRecoder.recode` mixes pieces it already holds into a new piece, without
decoding them.

## Nodes

How a block moves between nodes:

1. `Node.new_source(block_id, data, use_rs, share_size)` makes a node the source of a block.
   - With `use_rs=True`, the block is read as a `k x k` share matrix and extended to `2k x 2k`.
   - The result is split into `k` shreds.
   - Each shred is stored together with its commitment.
2. `Node.publish` returns a `BroadcastCodedBlockMsg` with one fresh coded piece per shred.
3. `Node.subscribe` verifies each piece and adds it to the shred's decoder. A shred's bytes are stored once it is fully decoded.
4. `Node.is_active_node` is true once the node holds every shred of the block.

## Commands

The package installs four commands. Each accepts `--help`.

| Command | What it does |
| --- | --- |
| `rlncsim-network` | Runs `simulate_network`. |
| `rlncsim-bench-pedersen` | Times one 2D-extended block with Pedersen commitments. |
| `rlncsim-bench-discrete-log` | Times the same work with discrete-log signatures, one committer per shred. |
| `rlncsim-bench-commit` | Times building a `DiscreteLogCommitter` and committing a whole block. |

**`rlncsim-network`**

- Node 0 becomes the source of a random block.
- Every node gets random neighbours.
- In each round, every node that holds the block publishes to its neighbours.
- The run ends when all nodes are active, or after more than 200 rounds.
- It prints the elapsed time, the wasted bandwidth, the number of rounds and the average CPU usage (from `psutil`).
- Wasted bandwidth is the bytes of messages whose pieces were redundant.
- Options: `--block-size`, `--share-size`, `--num-chunks`, `--num-nodes`, `--degree`, `--aggressive`.
- `--aggressive` is only reported.

**`rlncsim-bench-pedersen`**

- Times encoding, committing and verifying one 2D-extended block with Pedersen commitments.
- Options: `--block-size`, `--share-size`, `--num-chunks`.

**`rlncsim-bench-discrete-log`**

- Times committing, encoding and verifying with discrete-log signatures, with one committer per shred.
- Options: `--block-size`, `--share-size`, `--num-chunks`.

**`rlncsim-bench-commit`**

- Times building a `DiscreteLogCommitter` and committing a whole block split into `k` chunks.
- Options: `--block-size`, `--k`.

The defaults use realistic block sizes, so expect long runs. Pass smaller sizes
for quick experiments.

## What it does not do

- There is no network transport. Nodes exchange messages in the same process, inside `simulate_network`.
- `RetrieveShredMsg` is only a message type; no node sends or handles it.
- `NetworkRecoder` and `StorageRecoder` are available, but nodes do not forward recoded pieces.
- `BlsScalar` provides field arithmetic only. The package has no BLS12-381 curve and no polynomial (KZG-style) commitment scheme.
- Storage lives only in memory.