"""readme_validator modules - Self-contained bricks with clear contracts

- Item Index: Normalize item names for comparison
- Section Matcher: Fuzzy section heading matching
- Reconciler: Bidirectional Terraform/README diff
- Markdown Tree: Parsing and walking primitives
- Format Detector: Table-style vs heading-style detection
- Markdown Content: README queries
- Terraform Content: Terraform block extraction
"""
