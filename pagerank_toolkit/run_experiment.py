#!/usr/bin/env python3
import os, numpy as np, pandas as pd
from tqdm import tqdm
from pagerank_seq import PagerankOptions, ToleranceNorm, pagerank_reference, transpose_with_degree
from pagerank_seq import pagerank_monolithic_seq, pagerank_monolithic_seq_dynamic
from pagerank_seq.generate import random_graph, random_edge_batch

def l1(a, b) -> float:
    return float(np.abs(np.asarray(a, dtype=float) - np.asarray(b, dtype=float)).sum())

def main(vertices=1000, max_edges=8, batch_sizes=(1, 10, 100), repeat=1, damping=0.85, tolerance=1e-6,
         max_iterations=500, norm="L1", float32=False, seed=7, out="pagerank_experiment.csv", reference=None):
    dtype = np.float32 if float32 else np.float64
    o = PagerankOptions(repeat=repeat, tolerance_norm=ToleranceNorm[norm], damping=damping,
                        tolerance=tolerance, max_iterations=max_iterations)
    if reference is None:
        reference = vertices <= 2000

    print("[1/4] Generating random graph")
    x = random_graph(vertices, max_edges, seed=seed)
    xt = transpose_with_degree(x)
    print("  Nodes:", x.order, "Edges:", x.size)

    print("[2/4] Static PageRank on the original graph")
    r0 = pagerank_monolithic_seq(x, xt, None, o, dtype)
    print(f"  iterations={r0.iterations} time={r0.time:.3f}ms")

    print("[3/4] Static vs dynamic PageRank per edge batch")
    rows = []
    for k, size in enumerate(tqdm(batch_sizes, desc="Batches")):
        y = random_edge_batch(x, size, seed=seed + k + 1)
        yt = transpose_with_degree(y)
        s = pagerank_monolithic_seq(y, yt, r0.ranks, o, dtype)
        d = pagerank_monolithic_seq_dynamic(x, y, xt, yt, r0.ranks, o, dtype)
        ref = pagerank_reference(y, damping) if reference else None
        rows.append({
            "batch_size": size,
            "edges": y.size,
            "static_iterations": s.iterations,
            "static_time_ms": s.time,
            "dynamic_iterations": d.iterations,
            "dynamic_time_ms": d.time,
            "dynamic_vs_static_l1": l1(d.ranks, s.ranks),
            "static_vs_reference_l1": l1(s.ranks, ref) if ref is not None else np.nan,
            "dynamic_vs_reference_l1": l1(d.ranks, ref) if ref is not None else np.nan,
        })
    df = pd.DataFrame(rows)

    print("[4/4] Saving results")
    if os.path.dirname(out):
        os.makedirs(os.path.dirname(out), exist_ok=True)
    df.to_csv(out, index=False)
    print("Results saved to:", out)
    return df

if __name__ == "__main__":
    import argparse
    ap = argparse.ArgumentParser()
    ap.add_argument("--vertices", type=int, default=1000)
    ap.add_argument("--max_edges", type=int, default=8)
    ap.add_argument("--batch_sizes", type=int, nargs="+", default=[1, 10, 100])
    ap.add_argument("--repeat", type=int, default=1)
    ap.add_argument("--damping", type=float, default=0.85)
    ap.add_argument("--tolerance", type=float, default=1e-6)
    ap.add_argument("--max_iterations", type=int, default=500)
    ap.add_argument("--norm", type=str, choices=[t.name for t in ToleranceNorm], default="L1")
    ap.add_argument("--float32", action="store_true")
    ap.add_argument("--seed", type=int, default=7)
    ap.add_argument("--out", type=str, default="pagerank_experiment.csv")
    ap.add_argument("--no_reference", action="store_true", help="skip the dense reference solve")
    args = ap.parse_args()
    main(vertices=args.vertices, max_edges=args.max_edges, batch_sizes=args.batch_sizes, repeat=args.repeat,
         damping=args.damping, tolerance=args.tolerance, max_iterations=args.max_iterations, norm=args.norm,
         float32=args.float32, seed=args.seed, out=args.out, reference=False if args.no_reference else None)
