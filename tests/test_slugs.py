"""
Tests for slug normalization and allocation.
"""

import pytest

from onestay.core.errors import SlugAllocationError
from onestay.core.slugs import EMPTY_SLUG_FALLBACK, MAX_SLUG_LENGTH, SlugAllocator, normalize


def exists_in(taken):
    async def exists(candidate):
        return candidate in taken
    return exists


# =============================================================================
# Normalization
# =============================================================================


class TestNormalize:
    @pytest.mark.parametrize("name, expected", [
        ("Café de l'Été", "cafe-de-l-ete"),
        ("  Multiple   Spaces!! ", "multiple-spaces"),
        ("Villa Soleil", "villa-soleil"),
        ("L’Hôtel du Lac", "l-hotel-du-lac"),
        ("Crème Brûlée & Co.", "creme-brulee-co"),
        ("Señor Niño", "senor-nino"),
        ("---Already-Slugged---", "already-slugged"),
        ("Appt 42, 3e étage", "appt-42-3e-etage"),
    ])
    def test_examples(self, name, expected):
        assert normalize(name) == expected

    @pytest.mark.parametrize("name", [
        "Café de l'Été",
        "  Multiple   Spaces!! ",
        "Ünïcödé Ñame",
        "a" * 150,
        "x " * 80,
    ])
    def test_idempotent(self, name):
        once = normalize(name)
        assert normalize(once) == once

    def test_only_slug_characters(self):
        slug = normalize("Weird <name> with $ymbols / and\ttabs")

        assert slug == "weird-name-with-ymbols-and-tabs"
        assert all(c.isascii() and (c.isalnum() or c == "-") for c in slug)

    def test_truncated_without_trailing_hyphen(self):
        slug = normalize("ab " * 60)

        assert len(slug) <= MAX_SLUG_LENGTH
        assert not slug.endswith("-")

    def test_punctuation_only_is_empty(self):
        assert normalize("!!! ???") == ""


# =============================================================================
# Allocation
# =============================================================================


class TestSlugAllocator:
    @pytest.mark.asyncio
    async def test_free_base_is_used(self):
        slug = await SlugAllocator().allocate("Villa Soleil", exists_in(set()))

        assert slug == "villa-soleil"

    @pytest.mark.asyncio
    async def test_suffix_sequence(self):
        allocator = SlugAllocator()
        taken = set()

        for _ in range(5):
            taken.add(await allocator.allocate("Villa Soleil", exists_in(taken)))

        assert taken == {
            "villa-soleil", "villa-soleil-1", "villa-soleil-2", "villa-soleil-3", "villa-soleil-4",
        }

    @pytest.mark.asyncio
    async def test_first_gap_is_reused(self):
        taken = {"villa", "villa-2"}

        assert await SlugAllocator().allocate("Villa", exists_in(taken)) == "villa-1"

    @pytest.mark.asyncio
    async def test_empty_name_uses_fallback(self):
        allocator = SlugAllocator()

        assert await allocator.allocate("🏠🏠", exists_in(set())) == EMPTY_SLUG_FALLBACK
        assert await allocator.allocate("!!!", exists_in({EMPTY_SLUG_FALLBACK})) == f"{EMPTY_SLUG_FALLBACK}-1"

    @pytest.mark.asyncio
    async def test_ceiling(self):
        allocator = SlugAllocator(max_attempts=3)
        taken = {"villa", "villa-1", "villa-2"}

        with pytest.raises(SlugAllocationError):
            await allocator.allocate("Villa", exists_in(taken))

    @pytest.mark.asyncio
    async def test_last_attempt_can_succeed(self):
        allocator = SlugAllocator(max_attempts=3)

        assert await allocator.allocate("Villa", exists_in({"villa", "villa-1"})) == "villa-2"

    @pytest.mark.asyncio
    async def test_reallocate_keeps_current_slug(self):
        slug = await SlugAllocator().reallocate("VILLA  soleil!", exists_in({"villa-soleil"}), "villa-soleil")

        assert slug == "villa-soleil"

    @pytest.mark.asyncio
    async def test_reallocate_accepts_own_suffixed_slug(self):
        taken = {"villa", "villa-1"}

        assert await SlugAllocator().reallocate("Villa", exists_in(taken), "villa-1") == "villa-1"

    @pytest.mark.asyncio
    async def test_reallocate_to_new_name(self):
        taken = {"villa", "chalet"}

        assert await SlugAllocator().reallocate("Chalet", exists_in(taken), "villa") == "chalet-1"

    def test_invalid_ceiling(self):
        with pytest.raises(ValueError):
            SlugAllocator(max_attempts=0)
