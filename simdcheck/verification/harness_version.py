# simdcheck/verification/harness_version.py
# Harness version constant. Single authoritative definition.
# Referenced by reporter.py for the summary block.
# A change to the diagnostic text layout requires a version increment.

HARNESS_VERSION: str = "1.0.0"
