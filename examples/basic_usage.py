# SPDX-License-Identifier: MPL-2.0
"""Basic usage example for Provenance Base."""
from dataclasses import dataclass

from provenance_base import CaptureRegistry, construct, flatten, is_signed, verify
from provenance_base.core.crypto import Ed25519Signature


@dataclass
class Dataset:
    url: str
    rows: int


@dataclass
class Model:
    name: str
    dataset: Dataset


def main() -> None:
    registry = CaptureRegistry()
    registry.register(Dataset, lambda ds: {"url": ds.url, "rows": ds.rows})
    registry.register(
        Model,
        lambda m: {"name": m.name, "dataset": construct(m.dataset, registry=registry)},
    )
    registry.freeze()

    model = Model("classifier", Dataset("s3://bucket/train.csv", 1200))
    scheme = Ed25519Signature.generate(kid="example-key")

    record = construct(model, scheme, registry=registry)
    print(f"Signed: {is_signed(record)}")
    print(f"Verified: {verify(model, record)}")

    for path, value in flatten(record).items():
        print(f"{'.'.join(path)} = {value}")


if __name__ == "__main__":
    main()
