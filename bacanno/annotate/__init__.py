"""Command lines for the external annotation tools run by each stage.

Every tool function takes the sample, its stage output directory, the
stage preparation results and the run context, and runs one command.
"""
