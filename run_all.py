#!/usr/bin/env python3
"""
Full verification run.

Runs every configured sieve at every configured limit, checks that all
sieves agree, and re-tests every prime they produced with trial division
and Miller-Rabin.

Usage:
    python run_all.py
    python run_all.py --config config/custom.yaml
"""

import argparse
import time

import pandas as pd

from primekit import SIEVES, PrimalityResult, miller_rabin, trial_division
from primekit.config import load_config


def verify_primes(primes, trials: int, seed: int) -> bool:
    """True iff every value passes trial division and Miller-Rabin."""
    exact = trial_division()
    probable = miller_rabin(trials, seed=seed)
    for p in primes:
        if exact.test_integer(p) is not PrimalityResult.PRIME:
            return False
        if probable.test_integer(p) is PrimalityResult.COMPOSITE:
            return False
    return True


def run_limit(limit: int, config: dict) -> list:
    """Sieve one limit with every configured algorithm."""
    rows = []
    reference = None

    for name in config['sieves']:
        sieve = SIEVES[name](limit, num_workers=config['workers'],
                             seed=config['seed'], verbose=config['verbose'])
        start = time.time()
        count = sieve.sieve()
        elapsed = time.time() - start

        primes = sieve.select_all()
        if reference is None:
            reference = primes
        agrees = len(primes) == len(reference) and bool((primes == reference).all())

        rows.append({
            'algorithm': name,
            'limit': limit,
            'count': count,
            'seconds': round(elapsed, 3),
            'agrees': agrees,
            'verified': verify_primes(primes, config['miller_rabin_trials'], config['seed']),
        })

    return rows


def main():
    parser = argparse.ArgumentParser(description='Run and cross-check all prime sieves')
    parser.add_argument('--config', type=str, default='config/default.yaml',
                        help='Path to config file')
    args = parser.parse_args()

    config = load_config(args.config)

    print("=" * 60)
    print("primekit - Sieve Verification Suite")
    print("=" * 60)
    print(f"\nConfiguration:")
    print(f"  limits = {config['limits']}")
    print(f"  sieves = {config['sieves']}")
    print(f"  workers = {config['workers'] or 'CPU count'}")
    print(f"  miller_rabin_trials = {config['miller_rabin_trials']}")
    print(f"  seed = {config['seed']}")
    print()

    total_start = time.time()
    rows = []

    for i, limit in enumerate(config['limits'], 1):
        print("-" * 60)
        print(f"{i}. limit = {limit:,}")
        print("-" * 60)
        start = time.time()
        rows.extend(run_limit(limit, config))
        print(f"   Completed in {time.time() - start:.1f}s")
        print()

    df = pd.DataFrame(rows)

    print("=" * 60)
    print("RESULTS")
    print("=" * 60)
    print(df.to_string(index=False))
    print(f"\nTotal runtime: {time.time() - total_start:.1f}s")

    failed = df[~(df['agrees'] & df['verified'])]
    if len(failed):
        print("\nFAILED:")
        print(failed.to_string(index=False))
        raise SystemExit(1)


if __name__ == '__main__':
    main()
