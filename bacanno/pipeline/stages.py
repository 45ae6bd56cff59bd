"""The four annotation stages, in the order they run.

Each stage runs its tools inside its own conda environment and writes
per-sample output to <output>/<subdir>/<sample>/.
"""
import collections

from bacanno import install
from bacanno.annotate import barrnap, eggnog, gemoma, glimmer, hmmer, prokka

Stage = collections.namedtuple("Stage", ["name", "label", "env", "subdir", "tools",
                                         "commands", "prepare"])

def get_stages(config):
    """Build stage definitions, with environment pins taken from the configuration.
    """
    return [Stage("primary-prediction", "Part 1: Prodigal + Prokka",
                  install.env_from_config(config, "prodigal_prokka"), "Prodigal_Prokka",
                  [prokka.run_prodigal, prokka.run_prokka],
                  ["prodigal", "prokka"], None),
            Stage("rRNA-detection", "Part 2: Barrnap",
                  install.env_from_config(config, "barrnap"), "Barrnap",
                  [barrnap.run_barrnap],
                  ["barrnap"], None),
            Stage("homology-prediction", "Part 3: GeMoMa + HMMER",
                  install.env_from_config(config, "gemoma_hmmer"), "GeMoMa_HMMER",
                  [gemoma.run_gemoma, hmmer.run_hmmscan],
                  ["GeMoMa", "hmmscan"], gemoma.prepare),
            Stage("secondary-prediction-and-function", "Part 4: Glimmer + EggNOG",
                  install.env_from_config(config, "glimmer_eggnog"), "Glimmer_EggNOG",
                  [glimmer.run_glimmer, eggnog.run_eggnog],
                  ["long-orfs", "extract", "build-icm", "glimmer3", "emapper.py"],
                  glimmer.prepare)]
