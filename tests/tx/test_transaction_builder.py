"""
Tests for the immutable keyed TransactionBuilder.
"""

import pytest

from metaplex_client import InstructionWithSigners, Keypair, TransactionBuilder, TransactionContext
from metaplex_client.runtime.errors import MissingContextError, MissingFeePayerError

from helpers import mk_instruction, mk_step


@pytest.fixture
def s1():
    return Keypair.from_seed("s1")


@pytest.fixture
def s2():
    return Keypair.from_seed("s2")


class TestComposition:
    """Test add, prepend and key replacement."""

    def test_make_returns_empty_builder(self):
        builder = TransactionBuilder.make()

        assert builder.is_empty()
        assert builder.get_instruction_count() == 0
        assert builder.get_instructions() == []
        assert builder.get_signers() == []

    def test_add_new_key_increases_count_by_one(self, s1):
        builder = TransactionBuilder.make().add(mk_step(b"x", [s1], key="a"))

        grown = builder.add(mk_step(b"y", [s1], key="b"))

        assert grown.get_instruction_count() == builder.get_instruction_count() + 1

    def test_add_unkeyed_steps_always_appends(self, s1):
        step = mk_step(b"x", [s1])

        builder = TransactionBuilder.make().add(step).add(step)

        assert builder.get_instruction_count() == 2

    def test_add_existing_key_replaces_in_place(self, s1, s2):
        builder = (
            TransactionBuilder.make()
            .add(mk_step(b"first", [s1], key="first"))
            .add(mk_step(b"old", [s1], key="middle"))
            .add(mk_step(b"last", [s1], key="last"))
        )

        replaced = builder.add(mk_step(b"new", [s2], key="middle"))

        assert replaced.get_instruction_count() == 3
        assert [ix.data for ix in replaced.get_instructions()] == [b"first", b"new", b"last"]
        assert replaced.get_instruction_with_signers("middle").signers == (s2,)

    def test_same_key_twice_keeps_only_last_step_and_its_signers(self, s1, s2):
        x = mk_instruction(b"X", [s1])
        y = mk_instruction(b"Y", [s2])

        builder = (
            TransactionBuilder.make()
            .add(InstructionWithSigners(x, (s1,), "a"))
            .add(InstructionWithSigners(y, (s2,), "a"))
        )

        assert builder.get_instruction_count() == 1
        assert builder.get_instructions()[0] == y
        assert builder.get_signers() == [s2]

    def test_builders_are_immutable(self, s1):
        empty = TransactionBuilder.make()

        empty.add(mk_step(b"x", [s1]))

        assert empty.is_empty()

    def test_add_accepts_other_builders(self, s1):
        inner = TransactionBuilder.make().add(mk_step(b"a", [s1]), mk_step(b"b", [s1]))

        builder = TransactionBuilder.make().add(mk_step(b"0", [s1])).add(inner)

        assert [ix.data for ix in builder.get_instructions()] == [b"0", b"a", b"b"]

    def test_add_rejects_raw_instructions(self, s1):
        with pytest.raises(TypeError):
            TransactionBuilder.make().add(mk_instruction(b"x", [s1]))

    def test_prepend_preserves_relative_order(self, s1):
        builder = TransactionBuilder.make().add(mk_step(b"c", [s1]))

        builder = builder.prepend(mk_step(b"a", [s1]), mk_step(b"b", [s1]))

        assert [ix.data for ix in builder.get_instructions()] == [b"a", b"b", b"c"]

    def test_prepend_existing_key_replaces_in_place(self, s1):
        builder = TransactionBuilder.make().add(mk_step(b"a", [s1]), mk_step(b"old", [s1], key="k"))

        builder = builder.prepend(mk_step(b"new", [s1], key="k"))

        assert [ix.data for ix in builder.get_instructions()] == [b"a", b"new"]


class TestConditionalComposition:
    """Test when/unless."""

    def test_when_false_never_calls_fn(self, s1):
        calls = []
        builder = TransactionBuilder.make().add(mk_step(b"x", [s1]))

        def fn(b):
            calls.append(b)
            return b.add(mk_step(b"y", [s1]))

        result = builder.when(False, fn)

        assert calls == []
        assert result is builder

    def test_when_true_equals_fn_applied(self, s1):
        builder = TransactionBuilder.make().add(mk_step(b"x", [s1], key="x"))

        def fn(b):
            return b.add(mk_step(b"y", [s1], key="y"))

        assert builder.when(True, fn) == fn(builder)

    def test_when_is_referentially_transparent(self, s1):
        builder = TransactionBuilder.make()

        def fn(b):
            return b.add(mk_step(b"y", [s1], key="y"))

        assert builder.when(True, fn) == builder.when(True, fn)

    def test_unless(self, s1):
        builder = TransactionBuilder.make()

        def fn(b):
            return b.add(mk_step(b"y", [s1]))

        assert builder.unless(True, fn).is_empty()
        assert builder.unless(False, fn).get_instruction_count() == 1


class TestSigners:
    """Test signer deduplication."""

    def test_signer_required_by_many_steps_appears_once(self, s1, s2):
        builder = TransactionBuilder.make().add(
            mk_step(b"a", [s1]),
            mk_step(b"b", [s1, s2]),
            mk_step(b"c", [s2, s1]),
        )

        signers = builder.get_signers()

        assert signers == [s1, s2]

    def test_equal_public_keys_are_deduplicated(self):
        a = Keypair.from_seed("same")
        b = Keypair.from_seed("same")

        builder = TransactionBuilder.make().add(mk_step(b"a", [a]), mk_step(b"b", [b]))

        assert len(builder.get_signers()) == 1

    def test_fee_payer_comes_first(self, s1, s2):
        builder = TransactionBuilder.make().add(mk_step(b"a", [s1])).set_fee_payer(s2)

        assert builder.get_signers() == [s2, s1]
        assert builder.get_fee_payer() is s2


class TestSplitting:
    """Test splitting around keyed steps."""

    @pytest.fixture
    def builder(self, s1):
        return TransactionBuilder.make().add(
            mk_step(b"a", [s1], key="a"),
            mk_step(b"b", [s1], key="b"),
            mk_step(b"c", [s1], key="c"),
        )

    def test_split_after_key(self, builder):
        head, tail = builder.split_after_key("b")

        assert [ix.data for ix in head.get_instructions()] == [b"a", b"b"]
        assert [ix.data for ix in tail.get_instructions()] == [b"c"]

    def test_split_before_key(self, builder):
        head, tail = builder.split_before_key("b")

        assert [ix.data for ix in head.get_instructions()] == [b"a"]
        assert [ix.data for ix in tail.get_instructions()] == [b"b", b"c"]

    def test_split_on_missing_key(self, builder):
        head, tail = builder.split_using_key("missing")

        assert head is builder
        assert tail.is_empty()

    def test_get_instruction_with_signers_missing_key(self, builder):
        assert builder.get_instruction_with_signers("missing") is None


class TestToTransaction:
    """Test compilation into a transaction."""

    def test_requires_fee_payer(self, s1):
        builder = TransactionBuilder.make().add(mk_step(b"a", [s1])).set_context(TransactionContext("1" * 32))

        with pytest.raises(MissingFeePayerError):
            builder.to_transaction()

    def test_requires_context(self, s1):
        builder = TransactionBuilder.make().add(mk_step(b"a", [s1])).set_fee_payer(s1)

        with pytest.raises(MissingContextError):
            builder.to_transaction()

    def test_compiles_instructions_in_order(self, s1, s2):
        builder = (
            TransactionBuilder.make()
            .add(mk_step(b"a", [s1]), mk_step(b"b", [s2]))
            .set_context(TransactionContext("1" * 32))
        )

        transaction = builder.to_transaction(s1)

        assert transaction.message.fee_payer == s1.public_key
        assert [ix.data for ix in transaction.message.decompile()] == [b"a", b"b"]
