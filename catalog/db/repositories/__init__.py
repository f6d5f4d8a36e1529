"""
Per-domain repository modules for catalog storage.

Every function takes the unit-of-work ``Session`` first and never commits;
write helpers return affected-row counts so services can classify misses.
"""
