"""
Unit tests for SheetModel mutations.
"""

import io
import random

import pytest

from contact_sheet.core.errors import CapacityExceeded, SlotIndexError, SourceReadError
from contact_sheet.core.models import (
    MAX_SCALE,
    MIN_SCALE,
    Orientation,
    SheetModel,
)


@pytest.fixture
def sheet_of_three(png_bytes):
    sheet = SheetModel()
    sheet.add_images([png_bytes(color="red"), png_bytes(color="green"), png_bytes(color="blue")])
    return sheet


class TestAddImages:
    def test_new_sheet_is_empty_portrait(self):
        sheet = SheetModel()
        assert sheet.count == 0
        assert sheet.is_empty
        assert sheet.orientation is Orientation.PORTRAIT

    def test_when_nine_added_then_full(self, nine_images):
        sheet = SheetModel()
        sheet.add_images(nine_images)
        assert sheet.count == 9
        assert sheet.is_full
        assert sheet.remaining_capacity == 0

    def test_when_tenth_added_then_rejected_and_unchanged(self, nine_images, png_bytes):
        sheet = SheetModel()
        sheet.add_images(nine_images)
        before = sheet.slots

        with pytest.raises(CapacityExceeded) as exc_info:
            sheet.add_images([png_bytes()])

        assert sheet.count == 9
        assert sheet.slots == before
        assert exc_info.value.requested == 1
        assert exc_info.value.available == 0

    def test_when_batch_overflows_then_nothing_added(self, png_bytes):
        sheet = SheetModel()
        sheet.add_images([png_bytes() for _ in range(7)])

        with pytest.raises(CapacityExceeded):
            sheet.add_images([png_bytes() for _ in range(3)])

        assert sheet.count == 7

    def test_when_source_unreadable_then_nothing_added(self, png_bytes, tmp_path):
        sheet = SheetModel()
        missing = tmp_path / "missing.png"

        with pytest.raises(SourceReadError):
            sheet.add_images([png_bytes(), missing])

        assert sheet.count == 0

    def test_accepts_paths_and_streams(self, sample_image, png_bytes):
        sheet = SheetModel()
        sheet.add_images([sample_image, io.BytesIO(png_bytes()), str(sample_image)])

        assert sheet.count == 3
        assert sheet[0].name == "sample.png"
        assert sheet[0].source == sample_image.read_bytes()

    @pytest.mark.parametrize("single", [b"raw", "photo.png", "path"])
    def test_when_single_source_passed_then_type_error(self, single, tmp_path):
        sheet = SheetModel()
        if single == "path":
            single = tmp_path / "photo.png"

        with pytest.raises(TypeError, match="collection of sources"):
            sheet.add_images(single)

        assert sheet.count == 0

    def test_when_single_stream_passed_then_type_error(self, png_bytes):
        sheet = SheetModel()
        with pytest.raises(TypeError):
            sheet.add_images(io.BytesIO(png_bytes()))

    def test_new_slots_have_identity_transform(self, sheet_of_three):
        for slot in sheet_of_three:
            assert slot.rotation == 0
            assert slot.scale == 1.0


class TestRemoveImage:
    def test_when_middle_removed_then_order_preserved(self, sheet_of_three):
        first, _, third = sheet_of_three.slots

        sheet_of_three.remove_image(1)

        assert sheet_of_three.count == 2
        assert sheet_of_three[0] is first
        assert sheet_of_three[1] is third

    def test_when_index_out_of_range_then_error(self, sheet_of_three):
        with pytest.raises(SlotIndexError):
            sheet_of_three.remove_image(3)
        with pytest.raises(IndexError):
            sheet_of_three.remove_image(-1)
        assert sheet_of_three.count == 3


class TestRotateImage:
    def test_rotation_steps_clockwise(self, sheet_of_three):
        sheet_of_three.rotate_image(0)
        assert sheet_of_three[0].rotation == 90
        sheet_of_three.rotate_image(0)
        assert sheet_of_three[0].rotation == 180

    def test_four_rotations_return_to_start(self, sheet_of_three):
        sheet_of_three.rotate_image(2)
        start = sheet_of_three[2].rotation

        for _ in range(4):
            sheet_of_three.rotate_image(2)

        assert sheet_of_three[2].rotation == start

    def test_rotation_only_touches_target_slot(self, sheet_of_three):
        sheet_of_three.rotate_image(1)
        assert [s.rotation for s in sheet_of_three] == [0, 90, 0]


class TestAdjustScale:
    def test_scale_moves_by_delta(self, sheet_of_three):
        sheet_of_three.adjust_scale(0, 0.3)
        assert sheet_of_three[0].scale == pytest.approx(1.3)

    def test_step_helpers_use_tenth_increments(self, sheet_of_three):
        sheet_of_three.increase_scale(0)
        sheet_of_three.increase_scale(0)
        sheet_of_three.decrease_scale(0)
        assert sheet_of_three[0].scale == pytest.approx(1.1)

    def test_scale_saturates_silently(self, sheet_of_three):
        sheet_of_three.adjust_scale(0, 50)
        assert sheet_of_three[0].scale == MAX_SCALE
        sheet_of_three.adjust_scale(0, -50)
        assert sheet_of_three[0].scale == MIN_SCALE

    def test_random_deltas_stay_in_bounds(self, sheet_of_three):
        rng = random.Random(42)
        for _ in range(500):
            sheet_of_three.adjust_scale(1, rng.uniform(-3.0, 3.0))
            assert MIN_SCALE <= sheet_of_three[1].scale <= MAX_SCALE

    def test_repeated_small_steps_do_not_drift_below_minimum(self, sheet_of_three):
        for _ in range(30):
            sheet_of_three.decrease_scale(0)
        assert sheet_of_three[0].scale == MIN_SCALE

    def test_invalid_index_raises(self, sheet_of_three):
        with pytest.raises(SlotIndexError):
            sheet_of_three.adjust_scale(5, 0.1)


class TestOrientation:
    def test_set_orientation_accepts_strings(self):
        sheet = SheetModel()
        sheet.set_orientation("landscape")
        assert sheet.orientation is Orientation.LANDSCAPE

    def test_invalid_orientation_raises(self):
        with pytest.raises(ValueError):
            SheetModel().set_orientation("sideways")

    def test_toggle_keeps_slot_transforms(self, sheet_of_three):
        sheet_of_three.rotate_image(0)
        sheet_of_three.adjust_scale(2, -0.5)
        before = sheet_of_three.slots

        assert sheet_of_three.toggle_orientation() is Orientation.LANDSCAPE
        assert sheet_of_three.toggle_orientation() is Orientation.PORTRAIT

        assert sheet_of_three.slots == before


class TestSnapshot:
    def test_snapshot_is_isolated_from_later_mutation(self, sheet_of_three):
        snapshot = sheet_of_three.snapshot()

        sheet_of_three.rotate_image(0)
        sheet_of_three.remove_image(2)
        sheet_of_three.set_orientation(Orientation.LANDSCAPE)

        assert snapshot.count == 3
        assert snapshot.slots[0].rotation == 0
        assert snapshot.orientation is Orientation.PORTRAIT

    def test_clear_empties_sheet(self, sheet_of_three):
        sheet_of_three.clear()
        assert sheet_of_three.is_empty
        assert sheet_of_three.snapshot().is_empty
