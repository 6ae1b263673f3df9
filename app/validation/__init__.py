# Validation package.
#
#   engine      declarative rule checker returning field errors
#   validator   per-kind schema + relational integrity checks
