"""
Theurgy - Command implementations for osmoboot.

Each module corresponds to top-level CLI commands:
- balances: Query all balances (or one denom) of an address
- contract: Query a CosmWasm contract's state
"""
