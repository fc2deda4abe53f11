# ndnfwd

Building blocks for a Named Data Networking (NDN) forwarder. It is pure Python
and needs no third-party packages.

## Modules

- `ndnfwd.tlv` handles TLV encoding and decoding:
  - `Block` has `append`, `insert`, `find`, `erase`, `erase_all`, `parse`, `encode`, `wire` and `deep_copy`.
  - Variable-length numbers use `encode_varnum` and `decode_varnum`.
  - Non-negative integers use `encode_nni`, `decode_nni`, `encode_nni_block`, `decode_nni_block` and `nni_block_size`.
  - Whole blocks are read with `decode_block` and `decode_type_length`.
  - Every error derives from `NdnError`, which is a `ValueError`. Examples are `TooShortError`, `BufferTooShortError` and `OutOfRangeError`.
- `ndnfwd.tlv_types` holds the TLV type numbers for packets and management, together with `is_critical`.
- `ndnfwd.components` holds the name components:
  - `NameComponent` is the base for any TLV type.
  - `GenericNameComponent` and `KeywordNameComponent`.
  - The numeric components are `SegmentNameComponent`, `ByteOffsetNameComponent`, `VersionNameComponent`, `TimestampNameComponent` and `SequenceNumNameComponent`. Each has a `number` property and a `decode` class method.
  - The digest components are `ImplicitSha256DigestComponent` and `ParametersSha256DigestComponent`.
  - The module also has `decode_name_component`, `escape_component` and `unescape_component`.
- `ndnfwd.name` provides `Name`, which supports comparison, prefixes and wire encoding. It also has `name_from_string`, which parses the URI form such as `/a/b/seg=3`, and `decode_name`.
- `ndnfwd.security` provides `SignatureType`, `DigestSha256`, `sign` and `verify`:
  - DigestSha256 and the null signature are supported.
  - The RSA, ECDSA and HMAC types raise `NdnError`.
- `ndnfwd.signature_info` provides `SignatureInfo` and `decode_signature_info`. These cover both the Data SignatureInfo and the InterestSignatureInfo.
- `ndnfwd.uri` provides face URIs. It has `FaceUri` and `decode_uri_string`, plus the constructors:
  - `make_dev_face_uri`, `make_ethernet_face_uri` and `make_fd_face_uri`
  - `make_internal_face_uri` and `make_null_face_uri`
  - `make_udp_face_uri` and `make_unix_face_uri`

  The module also has the `Scope`, `State` and `UriType` enums and `NotCanonicalError`.
- `ndnfwd.pending_packet` provides `PendingPacket`, a packet on a link together with its link metadata.
- The forwarding tables are spread over several modules:
  - `ndnfwd.fib_strategy` holds the combined FIB and strategy-choice name tree. Create one with `new_fib_strategy_table()`; its root strategy is `/localhost/nfd/strategy/best-route/v=1`.
  - `ndnfwd.rib` provides `RibEntry` and `Route`. A RIB is built over a FIB table. Whenever routes change, it writes the lowest-cost nexthop for each face into that FIB.
  - `ndnfwd.network_region` provides `NetworkRegionTable`.
  - `ndnfwd.measurements` provides `Measurements`, a thread-safe table with compare-and-set, integer counters and moving averages.
  - `ndnfwd.dead_nonce_list` provides `DeadNonceList`. When an entry's lifetime runs out, it puts `True` on `expiration_timer`. The owner then calls `remove_expired_entry`.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
from ndnfwd.name import name_from_string
from ndnfwd.fib_strategy import new_fib_strategy_table
from ndnfwd.rib import RibEntry

fib = new_fib_strategy_table()
rib = RibEntry(fib)

prefix = name_from_string("/example/data")
rib.add_route(prefix, face_id=25, origin=0, cost=1)

hops = fib.longest_prefix_nexthops(name_from_string("/example/data/seg=3"))
print([(h.nexthop, h.cost) for h in hops])   # [(25, 1)]
print(fib.longest_prefix_strategy(prefix))    # /localhost/nfd/strategy/best-route/v=1

wire = prefix.encode().wire()                 # b'\x07\x0f\x08\x07example\x08\x04data'
```

Face URIs are canonized when they are created:

```python
from ndnfwd.uri import decode_uri_string

uri = decode_uri_string("udp6://[2001:db8::1]:6363")
print(uri.is_canonical(), str(uri))   # True udp6://[2001:db8::1]:6363
print(uri.scope())                    # Scope.NON_LOCAL
```

A UDP host that is not an IP address is resolved through DNS during canonization.

## What it does not do

This package provides the parts of a forwarder, not a forwarder to run. It has none of the following:

- a command or daemon
- faces that send or receive over a network
- Interest, Data or Nack packet types
- a PIT or Content Store
- management protocol handling
- configuration file loading