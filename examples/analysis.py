# %%


import matplotlib.pyplot as plt
import numpy as np

from freqmotif import analyze_fastq
from freqmotif.plot import plot_barplot

# %%


def simulate_reads(path, num_reads=2000, read_length=150, repeat_fraction=0.1, seed=111):
    """Write random reads to a FASTQ file, a fraction of them dinucleotide repeats."""
    rng = np.random.default_rng(seed)
    bases = np.array(list("ACGT"))
    with open(path, "w") as out:
        for i in range(num_reads):
            if rng.random() < repeat_fraction:
                unit = "".join(rng.choice(bases, size=2))
                sequence = (unit * read_length)[:read_length]
            else:
                sequence = "".join(rng.choice(bases, size=read_length))
            out.write(f"@sim_{i}\n{sequence}\n+\n{'I' * read_length}\n")


simulate_reads("simulated.fastq")

# %%

result = analyze_fastq(
    "simulated.fastq",
    output_dir="simulated_results",
    skip=0,
    ratio=30.0,
    plot_command=None,
)
print(f"{result.total_reads} reads, {result.low_complexity_reads} low complexity")
print(result.table.head(10))

# %%

fig, ax = plot_barplot(result.table, ratio=30.0, ylim=20.0)
plt.show()
