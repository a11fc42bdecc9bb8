"""
Data layer for Arbor.

Includes:
- Dataset schema and categorical metadata (`schema`)
- Loading / saving utilities (`data_loader`)
- Label resolution and weight checks (`labels`)
"""
