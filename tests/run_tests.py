#!/usr/bin/env python3

if __name__ == "__main__":
    import sys
    import pytest
    print("🚀 Running calendar bridge tests via pytest...")
    # Offline suite by default; pass extra pytest args (e.g. -m integration) to override
    args = sys.argv[1:] or ["-m", "not integration"]
    sys.exit(pytest.main(["-v", "tests/", *args]))
