"""Run the plugin with ``python -m protoc_gen_rust_grpc``."""

from __future__ import annotations

from protoc_gen_rust_grpc.plugin import main

if __name__ == "__main__":
    main()
