"""High level code for driving the annotation pipeline.

This structures processing into the following modules:

  - main.py: Validate inputs, set up outputs and run stages in order.
    - stages.py: The four stages and their tool chains.
    - sample.py: Run a single stage over every sample.
  - run_info.py: Samples, output layout and the run context.
  - genome.py: Retrieve and cache reference datasets.
  - config_utils.py, datadict.py: System configuration.
"""
