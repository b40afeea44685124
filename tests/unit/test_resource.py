"""Tests for resource types."""
import pytest

from cloudinpy.core.resource import ResourceType


class TestResourceType:
    """Test suite for ResourceType."""
    
    def test_wire_types(self):
        assert ResourceType.IMAGE.wire_type == "image"
        assert ResourceType.PDF.wire_type == "image"
        assert ResourceType.VIDEO.wire_type == "video"
        assert ResourceType.RAW.wire_type == "raw"
    
    def test_pdf_distinct_from_image(self):
        assert ResourceType.PDF is not ResourceType.IMAGE
        assert len(list(ResourceType)) == 4
    
    def test_only_raw_keeps_extension(self):
        keeping = [t for t in ResourceType if t.keeps_extension]
        
        assert keeping == [ResourceType.RAW]
    
    @pytest.mark.parametrize("name,expected", [
        ("image", ResourceType.IMAGE),
        ("PDF", ResourceType.PDF),
        (" video ", ResourceType.VIDEO),
        ("Raw", ResourceType.RAW),
    ])
    def test_from_name(self, name, expected):
        assert ResourceType.from_name(name) is expected
    
    def test_from_name_unknown(self):
        with pytest.raises(ValueError, match="Unknown resource type"):
            ResourceType.from_name("audio")
