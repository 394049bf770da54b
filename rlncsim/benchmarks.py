"""Benchmarks of commitment schemes and of block propagation over a simulated network."""

from __future__ import annotations

import argparse
import math
import random
import time
from collections.abc import Sequence
from dataclasses import dataclass

import psutil

from .bytesize import bytes_to_human_readable
from .coded import Committer
from .discrete_log import DiscreteLogCommitter
from .eds import FlatMatrix, extended_data_share
from .node import Node
from .pedersen import PedersenCommitter
from .rlnc import (
    NetworkDecoder,
    NetworkEncoder,
    PieceNotUsefulError,
    ReceivedAllPiecesError,
    RLNCError,
)
from .scalars import chunk_to_scalars, create_random_block

ONE_MEGABYTE = 1024 * 1024
MAX_ROUNDS = 200
_SCALAR_SIZE = 32
_RISTRETTO_POINT_SIZE = 160


@dataclass
class NetworkConfig:
    """Shape of the simulated network and of the coding applied to a block."""

    num_nodes: int
    degree: int
    aggressive: int
    num_chunks: int
    num_shreds: int
    custody_size: int


@dataclass
class BenchmarkResult:
    """Measurements of one network simulation."""

    time_ms: float
    wasted_bandwidth: int
    round_trips: int
    cpu_usage: float


def _format_duration(seconds: float) -> str:
    if seconds >= 1.0:
        return f"{seconds:.6f}s"
    if seconds >= 1e-3:
        return f"{seconds * 1e3:.6f}ms"
    return f"{seconds * 1e6:.3f}µs"


def _random_neighbors(node_id: int, num_nodes: int, degree: int) -> list[int]:
    neighbors: set[int] = set()
    while len(neighbors) < degree and len(neighbors) < num_nodes - 1:
        candidate = random.randrange(num_nodes)
        if candidate != node_id:
            neighbors.add(candidate)
    return list(neighbors)


def _extend_block(block: bytes, share_size: int, k: int) -> FlatMatrix:
    return extended_data_share(FlatMatrix(block, share_size, k), k)


def simulate_network(
    config: NetworkConfig,
    committer: Committer,
    block_size: int,
    share_size: int,
) -> BenchmarkResult:
    """Spread one random block from node 0 until every node holds it or rounds run out."""
    if share_size <= 0 or block_size % share_size:
        raise ValueError("block_size must be divisible by share_size")
    k = math.isqrt(block_size // share_size)
    if k == 0:
        raise ValueError("Invalid k: block_size too small or share_size too large")

    block = create_random_block(block_size)
    print(f"Step 1: Block created - size: {len(block)} bytes, k: {k}")

    print(f"Step 2: Creating FlatMatrix with k={k} ({k}x{k} matrix)")
    extended = _extend_block(block, share_size, k)
    print(
        f"Step 2: Extended matrix dimensions: {extended.dimensions()}, "
        f"data size: {bytes_to_human_readable(len(extended.data))}"
    )

    block_id = 0
    source = Node(
        0, committer, [], config.num_shreds, config.num_chunks, config.custody_size
    )
    source.new_source(block_id, block, True, share_size)
    nodes: dict[int, Node] = {0: source}
    for node_id in range(1, config.num_nodes):
        nodes[node_id] = Node(
            node_id, committer, [], config.num_shreds, config.num_chunks, config.custody_size
        )

    for node_id, node in nodes.items():
        node.neighbors = _random_neighbors(node_id, config.num_nodes, config.degree)
        print(f"Step 4: Node {node_id} neighbors: {node.neighbors}")
    print("All nodes ids: " + ", ".join(str(node_id) for node_id in nodes))

    start = time.perf_counter()
    round_count = 0
    wasted_bandwidth = 0
    cpu_usages: list[float] = []

    while True:
        round_count += 1
        cpu_usages.append(psutil.cpu_percent(interval=None))

        for node_id in range(config.num_nodes):
            sender = nodes[node_id]
            outgoing = []
            for neighbor_id in list(sender.neighbors):
                try:
                    outgoing.append((neighbor_id, sender.publish(block_id, sender.node_id)))
                except ValueError:
                    continue

            for destination_id, message in outgoing:
                if destination_id == node_id:
                    continue
                destination = nodes.get(destination_id)
                if destination is None:
                    continue
                size = message.coded_piece_size_in_bytes()
                try:
                    destination.subscribe(message)
                except (ReceivedAllPiecesError, PieceNotUsefulError):
                    wasted_bandwidth += size
                except RLNCError:
                    pass

        active = sum(1 for node in nodes.values() if node.is_active_node(block_id))
        print(
            f"Wasted Bandwidth: {bytes_to_human_readable(wasted_bandwidth)}, "
            f"Round trips: {round_count}, Active nodes: {active}"
        )
        if active == len(nodes) or round_count > MAX_ROUNDS:
            break

    elapsed = time.perf_counter() - start
    average_cpu = sum(cpu_usages) / len(cpu_usages) if cpu_usages else 0.0
    return BenchmarkResult(
        time_ms=elapsed * 1000.0,
        wasted_bandwidth=wasted_bandwidth,
        round_trips=round_count,
        cpu_usage=average_cpu,
    )


def _positive_int(text: str) -> int:
    value = int(text)
    if value <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {text}")
    return value


def _rlnc_parser(description: str, block_size: int) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument("--block-size", type=_positive_int, default=block_size)
    parser.add_argument("--share-size", type=_positive_int, default=512)
    parser.add_argument("--num-chunks", type=_positive_int, default=16)
    return parser


def _extend_and_report(block_size: int, share_size: int) -> tuple[int, FlatMatrix]:
    k = math.isqrt(block_size // share_size)
    print(f"Block will have size {k}x{k}")
    block = create_random_block(block_size)
    started = time.perf_counter()
    extended = _extend_block(block, share_size, k)
    print(f"📊 RS time for encoding with 2D: {_format_duration(time.perf_counter() - started)}")
    print(f"Extended matrix dimensions: {extended.dimensions()}")
    print(f"Share size: {bytes_to_human_readable(extended.share_size)}")
    return k, extended


def _shred_layout(data: bytes, k: int, num_chunks: int) -> tuple[list[bytes], int]:
    num_shreds = 4 * k * k
    shred_size = -(-len(data) // num_shreds)
    chunk_size = shred_size // num_chunks
    print(f"Shreds size: {bytes_to_human_readable(shred_size)}")
    print(f"Chunk size: {bytes_to_human_readable(chunk_size)}")
    shreds = [data[i : i + shred_size] for i in range(0, len(data), shred_size)]
    return shreds, chunk_size


def _verify_all(pieces, commitments, committers, num_chunks: int) -> bool:
    results = []
    for piece, commitment, committer in zip(pieces, commitments, committers):
        try:
            NetworkDecoder(committer, num_chunks).verify_coded_piece(piece, commitment)
        except RLNCError:
            results.append(False)
        else:
            results.append(True)
    return all(results)


def main_discrete_log(argv: Sequence[str] | None = None) -> int:
    """Time commitment, encoding and verification of one block with discrete-log signatures."""
    parser = _rlnc_parser("Discrete-log signature benchmark", 2 * ONE_MEGABYTE // 4)
    args = parser.parse_args(argv)
    if args.block_size < args.share_size:
        parser.error("block size must be at least one share")

    k, extended = _extend_and_report(args.block_size, args.share_size)
    shreds, chunk_size = _shred_layout(extended.data, k, args.num_chunks)
    if chunk_size == 0:
        parser.error("chunk size is zero")

    started = time.perf_counter()
    committers = []
    for shred in shreds:
        data_chunks = [
            chunk_to_scalars(shred[i : i + chunk_size]) for i in range(0, len(shred), chunk_size)
        ]
        committer = DiscreteLogCommitter(len(data_chunks), len(data_chunks[0]))
        committer.signature_vector = committer.commit(data_chunks)
        committers.append(committer)
    print(f"📊 Commitments time: {_format_duration(time.perf_counter() - started)}")

    encoders = [
        NetworkEncoder(committer, shred, args.num_chunks)
        for shred, committer in zip(shreds, committers)
    ]
    started = time.perf_counter()
    coded_block = [encoder.encode() for encoder in encoders]
    print(
        f"📊 Time to create one coded block: {_format_duration(time.perf_counter() - started)}"
    )
    piece_size = coded_block[0].size_in_bytes()
    print(
        f"📊 Coded block size: {bytes_to_human_readable(len(coded_block) * piece_size)}, "
        f"Piece len: {bytes_to_human_readable(len(coded_block))}, "
        f"Coded piece size: {bytes_to_human_readable(piece_size)}"
    )

    commitments = [encoder.commitment() for encoder in encoders]
    print(
        "📊 Commitment size: "
        + bytes_to_human_readable(len(commitments[0]) * len(commitments) * _SCALAR_SIZE)
    )

    started = time.perf_counter()
    if not _verify_all(coded_block, commitments, committers, args.num_chunks):
        raise RuntimeError("coded piece verification failed")
    print(f"📊 Verify time: {_format_duration(time.perf_counter() - started)}")
    return 0


def main_pedersen(argv: Sequence[str] | None = None) -> int:
    """Time encoding, commitment and verification of one block with Pedersen commitments."""
    parser = _rlnc_parser("Pedersen commitment benchmark", 2 * ONE_MEGABYTE)
    args = parser.parse_args(argv)
    if args.block_size < args.share_size:
        parser.error("block size must be at least one share")

    k, extended = _extend_and_report(args.block_size, args.share_size)
    shreds, chunk_size = _shred_layout(extended.data, k, args.num_chunks)
    if chunk_size == 0:
        parser.error("chunk size is zero")

    committer = PedersenCommitter(chunk_size)
    encoders = [NetworkEncoder(committer, shred, args.num_chunks) for shred in shreds]
    started = time.perf_counter()
    coded_block = [encoder.encode() for encoder in encoders]
    print(f"📊 Time to create coded block: {_format_duration(time.perf_counter() - started)}")
    print(
        "📊 Coded block size: "
        + bytes_to_human_readable(len(coded_block) * coded_block[0].size_in_bytes())
    )

    started = time.perf_counter()
    commitments = [encoder.commitment() for encoder in encoders]
    print(f"📊 Commitments time: {_format_duration(time.perf_counter() - started)}")
    print(
        "📊 Commitments size each node has to store: "
        + bytes_to_human_readable(len(commitments) * len(commitments[0]) * _RISTRETTO_POINT_SIZE)
    )

    started = time.perf_counter()
    if not _verify_all(coded_block, commitments, [committer] * len(coded_block), args.num_chunks):
        raise RuntimeError("coded piece verification failed")
    print(f"📊 Verify time: {_format_duration(time.perf_counter() - started)}")
    return 0


def main_commit_comparison(argv: Sequence[str] | None = None) -> int:
    """Time a discrete-log commitment to a whole block split into k chunks."""
    parser = argparse.ArgumentParser(description="Discrete-log commitment timing")
    parser.add_argument("--block-size", type=_positive_int, default=4 * ONE_MEGABYTE)
    parser.add_argument("--k", type=_positive_int, default=64)
    args = parser.parse_args(argv)
    if args.block_size % args.k:
        parser.error("block size must be divisible by k")

    chunk_size = args.block_size // args.k
    block = create_random_block(args.block_size)
    PedersenCommitter(chunk_size)
    data_chunks = [
        chunk_to_scalars(block[i : i + chunk_size]) for i in range(0, len(block), chunk_size)
    ]
    started = time.perf_counter()
    committer = DiscreteLogCommitter(len(data_chunks), len(data_chunks[0]))
    committer.commit(data_chunks)
    print(
        "📊 Discrete Log time for committing one block: "
        + _format_duration(time.perf_counter() - started)
    )
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Run the network propagation benchmark and print its results."""
    parser = _rlnc_parser("Network propagation benchmark", 2 * ONE_MEGABYTE)
    parser.add_argument("--num-nodes", type=_positive_int, default=100)
    parser.add_argument("--degree", type=_positive_int, default=12)
    parser.add_argument("--aggressive", type=_positive_int, default=1)
    args = parser.parse_args(argv)

    block_size, share_size = args.block_size, args.share_size
    if block_size % share_size:
        parser.error(
            f"Invalid config: block_size={block_size} share_size={share_size} (not divisible)"
        )
    k = math.isqrt(block_size // share_size)
    if k == 0:
        parser.error(f"Invalid config: block_size={block_size} share_size={share_size} (k=0)")

    num_shreds = k
    shred_size = -(-(4 * block_size) // num_shreds)
    chunk_size_in_scalars = shred_size // args.num_chunks
    if chunk_size_in_scalars == 0:
        parser.error(
            f"Invalid config: block_size={block_size} share_size={share_size} "
            "(chunk_size_in_scalars=0)"
        )

    committer = PedersenCommitter(chunk_size_in_scalars)
    config = NetworkConfig(
        num_nodes=args.num_nodes,
        degree=args.degree,
        aggressive=args.aggressive,
        num_chunks=args.num_chunks,
        num_shreds=num_shreds,
        custody_size=num_shreds * args.num_chunks,
    )
    print(
        f"Running benchmark with block_size={block_size} "
        f"({bytes_to_human_readable(block_size)}), share_size={share_size}, k={k}"
    )

    result = simulate_network(config, committer, block_size, share_size)

    print(
        f"Config: nodes={config.num_nodes}, degree={config.degree}, "
        f"aggressive={config.aggressive}, num_chunks={config.num_chunks}, "
        f"num_shreds={config.num_shreds}, custody_size={config.custody_size}"
    )
    print(
        f"Time: {result.time_ms:.2f} ms, "
        f"Wasted Bandwidth: {bytes_to_human_readable(result.wasted_bandwidth)} "
        f"({result.wasted_bandwidth} bytes), Round trips: {result.round_trips}, "
        f"Avg CPU Usage: {result.cpu_usage:.2f}%"
    )
    return 0