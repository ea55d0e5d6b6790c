from fb_catalog.core.catalog.attributes import normalize_key, merge_attributes


def test_normalize_key_lowercases_and_replaces_separators():
    assert normalize_key("Sunglasses Width") == "sunglasses_width"
    assert normalize_key("Age-Group") == "age_group"
    assert normalize_key("pa_Color") == "pa_color"


def test_normalize_key_keeps_other_characters():
    assert normalize_key("Size (EU)/US") == "size_(eu)/us"
    assert normalize_key("") == ""


def test_native_attribute_is_normalized():
    merged = merge_attributes([("Sunglasses Width", "52mm")], {})
    assert merged == {"sunglasses_width": "52mm"}


def test_override_wins_over_native():
    merged = merge_attributes([("age_group", "teen")], {"age_group": "toddler"})
    assert merged == {"age_group": "toddler"}


def test_override_wins_after_normalization():
    merged = merge_attributes([("Age Group", "teen"), ("Color", "red")], {"age-group": "toddler"})
    assert merged == {"age_group": "toddler", "color": "red"}


def test_keys_are_unique_after_normalization():
    merged = merge_attributes([("Pattern Type", "plain"), ("pattern-type", "striped")])
    assert list(merged) == ["pattern_type"]
    assert merged["pattern_type"] == "striped"


def test_merge_does_not_touch_inputs():
    native = [("Color", "blue")]
    overrides = {"Material": "cotton"}
    merge_attributes(native, overrides)
    assert native == [("Color", "blue")]
    assert overrides == {"Material": "cotton"}
