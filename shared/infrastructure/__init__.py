# Shared infrastructure module
