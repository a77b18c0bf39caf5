"""District Action Step Report package.

This module is the root of the district report pipeline, which reads a
table of school improvement action steps, asks an external text generation
service for one pattern analysis per district, and then synthesizes those
analyses into a single cross-district report.

Package Structure
-----------------
- `pipeline/action_steps/`:
    CSV loading, partitioning by district and batch documents.
- `pipeline/ai_processor/`:
    Chat completions client, service configuration, district analysis and
    report synthesis stages.
- `pipeline/district_report/`:
    Sequential orchestration, run states and report publishing.
- `config.py`: All configuration constants (paths, columns, prompts), as UPPER_SNAKE_CASE.
- `exceptions.py`: Project-specific exception classes.
- `program_district_report.py`: Command-line entrypoint.

Examples
--------
>>> import src
>>> # See src/program_district_report.py for the entrypoint.
"""
