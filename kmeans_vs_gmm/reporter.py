import numpy as np

HEAVY_RULE = "═" * 39
LIGHT_RULE = "─" * 37
_NUMBER_WORDS = {1: "ONE", 2: "TWO", 3: "THREE", 4: "FOUR", 5: "FIVE"}


def format_header():
    return "\n".join([HEAVY_RULE, "  K-MEANS vs GMM DEMONSTRATION", HEAVY_RULE, ""])


def format_example_points(results, example_points):
    """Coordinates and both cluster ids of every example point."""
    rows = results.set_index("idx").loc[list(example_points)]
    count = _NUMBER_WORDS.get(len(rows), str(len(rows)))
    lines = [f"{count} EXAMPLE POINTS:", LIGHT_RULE]
    for point, (idx, row) in enumerate(rows.iterrows(), start=1):
        lines.append("")
        lines.append(f"Point {point} (#{idx}): ({row['X1']:.2f}, {row['X2']:.2f})")
        lines.append(f"  K-means → Cluster {int(row['kmeans_cluster'])}")
        lines.append(f"  GMM     → Cluster {int(row['gmm_cluster'])}")

    lines.append("")
    if rows["kmeans_cluster"].nunique() == len(rows):
        lines.append("✓ Different clusters in K-means")
    if rows["gmm_cluster"].nunique() == 1:
        lines.append("✓ Same cluster in GMM")
    lines.append("")
    return "\n".join(lines)


def format_posteriors(responsibilities, example_points):
    """Full posterior vector per example point; the argmax is flagged."""
    lines = ["GMM POSTERIOR PROBABILITIES:", LIGHT_RULE]
    for point, idx in enumerate(example_points, start=1):
        probs = np.asarray(responsibilities[idx - 1])
        assigned = int(np.argmax(probs))
        lines.append("")
        lines.append(f"Point {point}:")
        for k, p in enumerate(probs):
            flag = " ← assigned" if k == assigned else ""
            lines.append(f"  Cluster {k + 1}: {p:.3f}{flag}")
    lines.append("")
    return "\n".join(lines)


def format_model_summary(summary):
    """
    Diagnostics block; `summary` is the dict built by
    clustering_utils.summarize_models.
    """
    km, gm = summary["kmeans"], summary["gmm"]
    lines = ["MODEL SUMMARY:", LIGHT_RULE]
    lines.append(f"K-means: inertia={km['inertia']:.2f}  "
                 f"silhouette={km['silhouette']:.3f}  iterations={km['n_iter']}")
    lines.append("  sizes:   " + _format_ids(km["population"], "{:d}"))
    lines.append("  WCSS:    " + _format_ids(km["wcss"], "{:.2f}"))
    lines.append("  spread:  " + _format_ids(km["avg_distance"], "{:.2f}"))
    lines.append(f"GMM:     log-likelihood={gm['log_likelihood']:.2f}  "
                 f"BIC={gm['bic']:.2f}  AIC={gm['aic']:.2f}")
    lines.append(f"  iterations={gm['n_iter']}  "
                 f"converged={'yes' if gm['converged'] else 'no'}")
    lines.append("  sizes:   " + _format_ids(gm["population"], "{:d}"))
    lines.append("  weights: " + _format_ids(gm["weights"], "{:.3f}"))
    lines.append("  spread:  " + _format_ids(gm["avg_distance"], "{:.2f}"))
    lines.append(f"Adjusted Rand index (K-means vs GMM): {summary['ari']:.3f}")
    lines.append("")
    lines.append(summary["crosstab"].to_string())
    lines.append("")
    return "\n".join(lines)


def _format_ids(values, fmt):
    return "  ".join(f"C{k}=" + fmt.format(v) for k, v in values.items())


def format_footer(output_path, dpi):
    return "\n".join([
        HEAVY_RULE,
        f"✓ Plot saved as '{output_path}'",
        f"  (High resolution: {dpi} DPI)",
        HEAVY_RULE,
    ])


def print_report(results, responsibilities, example_points, summary=None):
    """Print the example-point report; nothing passed in is modified."""
    print(format_header())
    print(format_example_points(results, example_points))
    print(format_posteriors(responsibilities, example_points))
    if summary is not None:
        print(format_model_summary(summary))
