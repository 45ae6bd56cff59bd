#!/usr/bin/env python -Es
"""Run the bacterial genome annotation pipeline.

Every FASTA file in <input_dir> is annotated by four stages, each in its
own conda environment:

  1. Prodigal + Prokka gene prediction and annotation
  2. Barrnap ribosomal RNA detection
  3. GeMoMa homology based prediction + HMMER domain scanning
  4. Glimmer gene prediction + EggNOG functional annotation

Usage:
  bacanno_pipeline.py run [<input_dir>] [<output_dir>] [<threads>]
     --config YAML configuration overriding environments, references and resources
"""
import sys

from bacanno.pipeline.main import main

if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
