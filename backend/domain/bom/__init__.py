"""
BOM Domain - Bill of Materials.

This domain handles the hierarchical structure of parts:
- Every part has at most one parent; parts without a parent are roots
- A part with all of its descendants forms a subtree
- Deleting a part removes its whole subtree
- A part is never moved to another parent once created
"""
