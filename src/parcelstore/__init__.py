"""
parcelstore core package.

This package currently provides:
- A SQLite-backed parcel store (`parcelstore.parcels`)
- Database connection, query and schema helpers (`parcelstore.database`)
- A minimal Typer-based CLI (`parcelstore.cli`)

Configuration:
- Shared, project-wide filesystem anchors live in `parcelstore.global_config`.
"""
