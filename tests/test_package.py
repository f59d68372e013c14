"""
Test the package surface.
"""

import pytest

import glm_sandbox


class TestPackage:
    """Version, notice and public exports."""

    def test_version(self):
        assert glm_sandbox.__version__ == "1.0.0"

    def test_license_notice(self):
        assert "Copyright (C) 2024 SGCX" in glm_sandbox.__doc__
        assert "GPL-3.0" in glm_sandbox.__doc__

    def test_public_api(self):
        for name in glm_sandbox.__all__:
            assert hasattr(glm_sandbox, name), name


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
