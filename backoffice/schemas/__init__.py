# Schemas package init: API contracts, kept separate from the ORM models
