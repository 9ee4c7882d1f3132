"""
Pneuma - Chain interaction layer for osmoboot.

Provides the chain registry, gas pricing, the Tendermint JSON-RPC client,
signing sessions and the read queries issued against them.

Uses httpx for transport and cosmpy's generated protobuf types for ABCI
query payloads.
"""
