from typing import Mapping

import pandas as pd

from freqmotif.functions import ALL_MOTIFS

LOW_COMPLEXITY = "LowComplexity"
COLUMNS = ["Motif", "Proportion"]


def build_result_table(motif_percentages: Mapping[str, float], low_complexity: float) -> pd.DataFrame:
    """
    Merge motif and low-complexity percentages into the ranked result table.

    All motifs of the fixed universe are present, absent ones with 0. Rows are
    sorted by proportion descending, equal proportions by label ascending.
    """
    unknown = set(motif_percentages) - set(ALL_MOTIFS)
    if unknown:
        raise ValueError(f"Unknown motifs in result: {sorted(unknown)}")

    proportions = dict.fromkeys(ALL_MOTIFS, 0.0)
    proportions.update(motif_percentages)
    proportions[LOW_COMPLEXITY] = low_complexity

    table = pd.DataFrame(list(proportions.items()), columns=COLUMNS)
    table = table.sort_values(["Proportion", "Motif"], ascending=[False, True], kind="mergesort")
    return table.reset_index(drop=True)
