# Services package.
#
#   resource_model   generic soft-delete write model, its category-scoped
#                     extension, and the read-side lookup model
#   actions          orchestration of write and read models per kind
#
# Models are bound to a DocumentStore (one AsyncSession + one ORM model);
# the router layer controls the transaction boundary via ``get_db``.
