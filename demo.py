#!/usr/bin/env python3
"""
Demo and benchmarks for the homomorphic LWR PRF.

Runs the full pipeline (keygen, encode, evaluate, decrypt) with timings,
then re-runs it under a fresh keypair to show the output is determined by
the PRF key and the input alone.

Usage:
    python3 demo.py                      # Default parameters, input 010203
    python3 demo.py --input ""           # Empty input
    python3 demo.py --strategy ciphertext
    python3 demo.py --dim 64 --runs 3
"""

import argparse
import logging
import time

from hprf.lwe import LWEParams
from hprf.lwr import Params, Client, Server, STRATEGIES, generate_keypair, generate_prf_key
from hprf.lwr.utils import expand_input, evaluate_clear, bytes_from_rounded


# =============================================================================
# Formatting Utilities
# =============================================================================


def format_time(seconds: float) -> str:
    """Format time with appropriate unit."""
    if seconds >= 1:
        return f"{seconds:.2f}s"
    if seconds >= 0.001:
        return f"{seconds*1000:.2f}ms"
    return f"{seconds*1_000_000:.1f}us"


def format_bytes(n: int) -> str:
    """Format bytes with KiB/MiB suffix."""
    if n >= 1024 * 1024:
        return f"{n / (1024**2):.2f} MiB"
    if n >= 1024:
        return f"{n / 1024:.2f} KiB"
    return f"{n} B"


def ciphertext_size(lwe_params: LWEParams) -> int:
    """Size of one ciphertext in bytes: 64-bit mask words plus the body."""
    return 8 * (lwe_params.lwe_dimension + 1)


# =============================================================================
# PRF Demo
# =============================================================================


def run_pipeline(params, lwe_params, prf_key, x, strategy, max_workers):
    """Run one keygen/encode/evaluate/decrypt pass. Returns (output, timings)."""
    timings = {}

    start = time.perf_counter()
    client_key, server_key = generate_keypair(params, lwe_params)
    timings["keygen"] = time.perf_counter() - start

    client = Client(params, client_key, max_workers=max_workers)
    server = Server(params, server_key, prf_key, strategy=strategy, max_workers=max_workers)

    start = time.perf_counter()
    h = client.encode(x)
    timings["encode"] = time.perf_counter() - start

    start = time.perf_counter()
    y_enc = server.evaluate(h)
    timings["evaluate"] = time.perf_counter() - start

    start = time.perf_counter()
    y = client.decrypt(y_enc)
    timings["decrypt"] = time.perf_counter() - start

    return y, timings


def run_demo(params: Params, lwe_params: LWEParams, x: bytes, strategy_name: str, runs: int, max_workers):
    """Run the PRF demo with detailed metrics."""
    print("=" * 70)
    print("Homomorphic LWR PRF - Demo & Benchmarks")
    print("=" * 70)

    print(f"\n{'Parameters':─^70}")
    print(f"  Lattice dim (n):    {params.lattice_dim:>12}")
    print(f"  log2 q / log2 p:    {f'{params.log2q} / {params.log2p}':>12}")
    print(f"  Output length:      {params.out_len:>12} bytes")
    print(f"  Matrix rows:        {params.num_rows:>12}")
    print(f"  LWE dimension:      {lwe_params.lwe_dimension:>12}")
    print(f"  Operand strategy:   {strategy_name:>12}")
    print(f"  Input:              {x.hex() or '(empty)':>12}")

    prf_key = generate_prf_key(params)
    strategy = STRATEGIES[strategy_name]()

    outputs = []
    all_timings = []
    for run in range(runs):
        y, timings = run_pipeline(params, lwe_params, prf_key, x, strategy, max_workers)
        outputs.append(y)
        all_timings.append(timings)

    expected = bytes_from_rounded(evaluate_clear(expand_input(x, params), prf_key, params), params)
    deterministic = all(y == outputs[0] for y in outputs)
    correct = outputs[0] == expected

    print(f"\n{'Output':─^70}")
    print(f"  y = {outputs[0].hex()}")
    print(f"  Matches clear evaluation:   {'PASS' if correct else 'FAIL':>8}")
    print(f"  Stable across {runs} keypairs:  {'PASS' if deterministic else 'FAIL':>8}")

    print(f"\n{'Timing breakdown (avg per run)':─^70}")
    total = 0.0
    for phase in ("keygen", "encode", "evaluate", "decrypt"):
        avg = sum(t[phase] for t in all_timings) / len(all_timings)
        total += avg
        print(f"    {phase + '():':<20} {format_time(avg):>10}")
    print(f"    ─────────────────────────────────")
    print(f"    {'Total:':<20} {format_time(total):>10}")

    ct_size = ciphertext_size(lwe_params)
    print(f"\n{'Communication Costs':─^70}")
    print(f"  Query size:         {format_bytes(ct_size * params.num_rows * params.lattice_dim):>12}  (encrypted matrix)")
    print(f"  Response size:      {format_bytes(ct_size * params.num_rows):>12}  (one ciphertext per row)")
    print("=" * 70)


# =============================================================================
# Main
# =============================================================================


DEFAULT_INPUT = "010203"
DEFAULT_RUNS = 2


def main():
    parser = argparse.ArgumentParser(
        description="Homomorphic LWR PRF demo with timings",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python3 demo.py                        # n=8, q=2^12, p=2^8, 16-byte output
  python3 demo.py --input 68656c6c6f     # Input given as hex
  python3 demo.py --strategy ciphertext  # Key held as trivial ciphertexts
  python3 demo.py --workers 1            # Single-threaded
        """,
    )
    parser.add_argument("--input", default=DEFAULT_INPUT, help=f"Input as hex (default: {DEFAULT_INPUT})")
    parser.add_argument("--dim", type=int, default=Params.lattice_dim, help=f"Lattice dimension (default: {Params.lattice_dim})")
    parser.add_argument("--log2q", type=int, default=Params.log2q, help=f"log2 of q (default: {Params.log2q})")
    parser.add_argument("--log2p", type=int, default=Params.log2p, help=f"log2 of p (default: {Params.log2p})")
    parser.add_argument("--out-len", type=int, default=Params.out_len, help=f"Output bytes (default: {Params.out_len})")
    parser.add_argument("--lwe-dim", type=int, default=LWEParams.lwe_dimension, help=f"LWE dimension (default: {LWEParams.lwe_dimension})")
    parser.add_argument("--strategy", choices=sorted(STRATEGIES), default="scalar", help="Operand strategy (default: scalar)")
    parser.add_argument("--runs", type=int, default=DEFAULT_RUNS, help=f"Pipeline runs (default: {DEFAULT_RUNS})")
    parser.add_argument("--workers", type=int, default=None, help="Thread pool size (default: executor default)")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    params = Params(lattice_dim=args.dim, log2q=args.log2q, log2p=args.log2p, out_len=args.out_len)
    lwe_params = LWEParams.for_prf(params, lwe_dimension=args.lwe_dim)
    run_demo(params, lwe_params, bytes.fromhex(args.input), args.strategy, max(1, args.runs), args.workers)


if __name__ == "__main__":
    main()
