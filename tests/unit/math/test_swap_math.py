"""Tests for the single-range swap step."""

import pytest

from swapmath.math.errors import InvalidSqrtPrice
from swapmath.math.sqrt_price_math import (
    get_next_sqrt_price_from_input,
    get_next_sqrt_price_from_output,
)
from swapmath.math.swap_math import SwapStep, compute_swap_step
from swapmath.safe_int import DivisionByZero
from tests.helpers import encode_price_sqrt, expand_to_18_decimals


class TestComputeSwapStepReferenceVectors:
    """Vectors from the on-chain SwapMath test suite."""

    def test_exact_in_capped_at_price_target_one_for_zero(self):
        """Exact input stops at the target when the input is more than enough."""
        price = encode_price_sqrt(1, 1)
        price_target = encode_price_sqrt(101, 100)
        liquidity = expand_to_18_decimals(2)
        amount = expand_to_18_decimals(1)

        step = compute_swap_step(price, price_target, liquidity, amount, 600)

        assert step.amount_in == 9975124224178055
        assert step.fee_amount == 5988667735148
        assert step.amount_out == 9925619580021728
        assert step.amount_in + step.fee_amount < amount

        price_after_whole_input = get_next_sqrt_price_from_input(price, liquidity, amount, False)
        assert step.sqrt_ratio_next_x96 == price_target
        assert step.sqrt_ratio_next_x96 < price_after_whole_input

    def test_exact_out_capped_at_price_target_one_for_zero(self):
        """Exact output stops at the target when the output cannot be reached."""
        price = encode_price_sqrt(1, 1)
        price_target = encode_price_sqrt(101, 100)
        liquidity = expand_to_18_decimals(2)
        amount = -expand_to_18_decimals(1)

        step = compute_swap_step(price, price_target, liquidity, amount, 600)

        assert step.amount_in == 9975124224178055
        assert step.fee_amount == 5988667735148
        assert step.amount_out == 9925619580021728
        assert step.amount_out < -amount

        price_after_whole_output = get_next_sqrt_price_from_output(price, liquidity, -amount, False)
        assert step.sqrt_ratio_next_x96 == price_target
        assert step.sqrt_ratio_next_x96 < price_after_whole_output

    def test_exact_in_fully_spent_one_for_zero(self):
        """Exact input that falls short of the target is consumed entirely."""
        price = encode_price_sqrt(1, 1)
        price_target = encode_price_sqrt(1000, 100)
        liquidity = expand_to_18_decimals(2)
        amount = expand_to_18_decimals(1)

        step = compute_swap_step(price, price_target, liquidity, amount, 600)

        assert step.amount_in == 999400000000000000
        assert step.fee_amount == 600000000000000
        assert step.amount_out == 666399946655997866
        assert step.amount_in + step.fee_amount == amount

        price_after_input_less_fee = get_next_sqrt_price_from_input(
            price, liquidity, amount - step.fee_amount, False
        )
        assert step.sqrt_ratio_next_x96 < price_target
        assert step.sqrt_ratio_next_x96 == price_after_input_less_fee

    def test_exact_out_fully_received_one_for_zero(self):
        """Exact output short of the target delivers exactly the requested amount."""
        price = encode_price_sqrt(1, 1)
        price_target = encode_price_sqrt(10000, 100)
        liquidity = expand_to_18_decimals(2)
        amount = -expand_to_18_decimals(1)

        step = compute_swap_step(price, price_target, liquidity, amount, 600)

        assert step.amount_in == 2000000000000000000
        assert step.fee_amount == 1200720432259356
        assert step.amount_out == -amount

        price_after_whole_output = get_next_sqrt_price_from_output(price, liquidity, -amount, False)
        assert step.sqrt_ratio_next_x96 < price_target
        assert step.sqrt_ratio_next_x96 == price_after_whole_output

    def test_amount_out_capped_at_desired_amount_out(self):
        """Rounding in the recomputed output never exceeds the requested output."""
        step = compute_swap_step(
            417332158212080721273783715441582,
            1452870262520218020823638996,
            159344665391607089467575320103,
            -1,
            1,
        )

        assert step.amount_in == 1
        assert step.fee_amount == 1
        assert step.amount_out == 1
        assert step.sqrt_ratio_next_x96 == 417332158212080721273783715441581

    def test_target_price_of_1_uses_partial_input_amount(self):
        """Reaching a target of 1 consumes only the input needed to get there."""
        amount = 3915081100057732413702495386755767

        step = compute_swap_step(2, 1, 1, amount, 1)

        assert step.amount_in == 39614081257132168796771975168
        assert step.fee_amount == 39614120871253040049813
        assert step.amount_in + step.fee_amount <= amount
        assert step.amount_out == 0
        assert step.sqrt_ratio_next_x96 == 1

    def test_entire_input_amount_taken_as_fee(self):
        """An input too small to move the price is retained entirely as fee."""
        step = compute_swap_step(2413, 79887613182836312, 1985041575832132834610021537970, 10, 1872)

        assert step.amount_in == 0
        assert step.fee_amount == 10
        assert step.amount_out == 0
        assert step.sqrt_ratio_next_x96 == 2413

    def test_intermediate_insufficient_liquidity_exact_out_zero_for_one(self):
        """Tiny liquidity reaches the target with zero output (price moving up)."""
        sqrt_price = 20282409603651670423947251286016
        sqrt_price_target = sqrt_price * 11 // 10

        step = compute_swap_step(sqrt_price, sqrt_price_target, 1024, -4, 3000)

        assert step.amount_out == 0
        assert step.sqrt_ratio_next_x96 == sqrt_price_target
        assert step.amount_in == 26215
        assert step.fee_amount == 79

    def test_intermediate_insufficient_liquidity_exact_out_one_for_zero(self):
        """Tiny liquidity reaches the target with capped output (price moving down)."""
        sqrt_price = 20282409603651670423947251286016
        sqrt_price_target = sqrt_price * 9 // 10

        step = compute_swap_step(sqrt_price, sqrt_price_target, 1024, -263000, 3000)

        assert step.amount_out == 26214
        assert step.sqrt_ratio_next_x96 == sqrt_price_target
        assert step.amount_in == 1
        assert step.fee_amount == 1


class TestComputeSwapStepScenarios:
    """Named scenarios for direction, mode and fee handling."""

    def test_exact_in_price_down_short_of_target(self):
        """Scenario A: input too small to reach half price moves price part way."""
        current = 2**96
        target = 2**95
        amount = 10**17

        step = compute_swap_step(current, target, 10**18, amount, 3000)

        # reaching the target needs 1e18 of token0, far more than 1e17
        assert target < step.sqrt_ratio_next_x96 < current
        assert step.amount_in + step.fee_amount == amount
        assert step.fee_amount >= amount * 3000 // 1_000_000
        assert step.amount_out > 0

    def test_exact_out_price_up_fully_satisfied(self):
        """Scenario B: exact output well inside the range is delivered exactly."""
        current = 2**96
        target = 2**97

        step = compute_swap_step(current, target, 5 * 10**17, -2 * 10**16, 0)

        assert step.amount_out == 2 * 10**16
        assert step.fee_amount == 0
        assert current < step.sqrt_ratio_next_x96 < target

    @pytest.mark.parametrize("amount", [10**30, -(10**30)])
    @pytest.mark.parametrize(
        "current,target",
        [
            (encode_price_sqrt(1, 1), encode_price_sqrt(101, 100)),
            (encode_price_sqrt(1, 1), encode_price_sqrt(100, 101)),
        ],
    )
    def test_zero_fee_charges_nothing_at_target(self, current, target, amount):
        """Scenario C: a zero fee rate never charges a fee when the target is reached."""
        step = compute_swap_step(current, target, expand_to_18_decimals(2), amount, 0)

        assert step.sqrt_ratio_next_x96 == target
        assert step.fee_amount == 0

    @pytest.mark.parametrize("amount", [10**18, -(10**18)])
    @pytest.mark.parametrize(
        "current,target",
        [
            (encode_price_sqrt(1, 1), encode_price_sqrt(1, 2)),
            (encode_price_sqrt(1, 1), encode_price_sqrt(2, 1)),
        ],
    )
    def test_zero_liquidity_exchanges_nothing(self, current, target, amount):
        """Scenario D: zero liquidity moves no tokens and never divides by zero.

        This departs from the literal wording of Scenario D, which expects the
        next price to equal the current price. Every boundary delta is zero at
        zero liquidity, so the step algorithm reports the target as reached and
        the price jumps to the target with nothing exchanged.
        """
        step = compute_swap_step(current, target, 0, amount, 3000)

        assert step.amount_in == 0
        assert step.amount_out == 0
        assert step.fee_amount == 0
        # the empty range is skipped entirely
        assert step.sqrt_ratio_next_x96 == target

    def test_zero_liquidity_at_target_does_not_move(self):
        """Zero liquidity with current == target leaves the price unchanged."""
        price = encode_price_sqrt(1, 1)

        step = compute_swap_step(price, price, 0, 10**18, 3000)

        assert step == SwapStep(price, 0, 0, 0)

    def test_current_equals_target_exact_in(self):
        """No movement possible: nothing consumed, nothing charged."""
        price = encode_price_sqrt(1, 1)

        step = compute_swap_step(price, price, expand_to_18_decimals(2), 10**18, 3000)

        assert step.sqrt_ratio_next_x96 == price
        assert step.amount_in == 0
        assert step.amount_out == 0
        assert step.fee_amount == 0


class TestComputeSwapStepProperties:
    """Invariants over a grid of inputs."""

    PRICES = [
        (encode_price_sqrt(1, 1), encode_price_sqrt(101, 100)),
        (encode_price_sqrt(1, 1), encode_price_sqrt(100, 101)),
        (encode_price_sqrt(1, 1), encode_price_sqrt(1000, 100)),
        (encode_price_sqrt(1000, 100), encode_price_sqrt(1, 1)),
        (2**96, 2**95),
        (2**96, 2**97),
        (4295128740, 4295128739),
        (1461446703485210103287273052203988822378723970341, 2**159),
    ]
    LIQUIDITIES = [1, 1024, 10**18, 2**127]
    AMOUNTS = [1, 10**6, 10**18, 10**30, -1, -(10**6), -(10**18), -(10**30)]
    FEES = [0, 1, 500, 3000, 10000, 999999]

    @staticmethod
    def _cases():
        for current, target in TestComputeSwapStepProperties.PRICES:
            for liquidity in TestComputeSwapStepProperties.LIQUIDITIES:
                for amount in TestComputeSwapStepProperties.AMOUNTS:
                    yield current, target, liquidity, amount

    @pytest.mark.parametrize("fee_pips", FEES)
    def test_next_price_between_current_and_target(self, fee_pips):
        """The next price never passes the target nor moves backward."""
        for current, target, liquidity, amount in self._cases():
            step = compute_swap_step(current, target, liquidity, amount, fee_pips)
            if current >= target:
                assert target <= step.sqrt_ratio_next_x96 <= current
            else:
                assert current <= step.sqrt_ratio_next_x96 <= target

    @pytest.mark.parametrize("fee_pips", FEES)
    def test_exact_in_never_spends_more_than_remaining(self, fee_pips):
        """Input plus fee is bounded by the remaining amount, and equal when short of target."""
        for current, target, liquidity, amount in self._cases():
            if amount < 0:
                continue
            step = compute_swap_step(current, target, liquidity, amount, fee_pips)
            assert step.amount_in + step.fee_amount <= amount
            if step.sqrt_ratio_next_x96 != target:
                assert step.amount_in + step.fee_amount == amount

    @pytest.mark.parametrize("fee_pips", FEES)
    def test_exact_out_never_pays_more_than_requested(self, fee_pips):
        """Output is bounded by the requested amount, and equal when short of target."""
        for current, target, liquidity, amount in self._cases():
            if amount >= 0:
                continue
            step = compute_swap_step(current, target, liquidity, amount, fee_pips)
            assert step.amount_out <= -amount
            if step.sqrt_ratio_next_x96 != target:
                assert step.amount_out == -amount

    @pytest.mark.parametrize("fee_pips", FEES)
    def test_amounts_non_negative(self, fee_pips):
        """All reported amounts are non-negative."""
        for current, target, liquidity, amount in self._cases():
            step = compute_swap_step(current, target, liquidity, amount, fee_pips)
            assert step.amount_in >= 0
            assert step.amount_out >= 0
            assert step.fee_amount >= 0

    def test_fee_non_decreasing_in_fee_pips(self):
        """With the target reached and the same input, a higher fee rate never charges less."""
        current = encode_price_sqrt(1, 1)
        target = encode_price_sqrt(101, 100)
        liquidity = expand_to_18_decimals(2)

        steps = [
            compute_swap_step(current, target, liquidity, -expand_to_18_decimals(1), fee)
            for fee in self.FEES
        ]

        assert all(step.sqrt_ratio_next_x96 == target for step in steps)
        assert len({step.amount_in for step in steps}) == 1
        fees = [step.fee_amount for step in steps]
        assert fees == sorted(fees)

    @pytest.mark.parametrize("zero_for_one", [True, False])
    @pytest.mark.parametrize("exact_in", [True, False])
    def test_continuing_from_next_price_never_moves_backward(self, zero_for_one, exact_in):
        """A follow-up step from the reached price with the leftover amount keeps moving forward."""
        current = encode_price_sqrt(1, 1)
        if zero_for_one:
            first_target, final_target = encode_price_sqrt(100, 101), encode_price_sqrt(1, 2)
        else:
            first_target, final_target = encode_price_sqrt(101, 100), encode_price_sqrt(2, 1)
        liquidity = expand_to_18_decimals(2)
        amount = expand_to_18_decimals(1) if exact_in else -expand_to_18_decimals(1)

        first = compute_swap_step(current, first_target, liquidity, amount, 3000)
        assert first.sqrt_ratio_next_x96 == first_target
        if exact_in:
            leftover = amount - (first.amount_in + first.fee_amount)
        else:
            leftover = amount + first.amount_out

        second = compute_swap_step(
            first.sqrt_ratio_next_x96, final_target, liquidity, leftover, 3000
        )

        if zero_for_one:
            assert second.sqrt_ratio_next_x96 <= first.sqrt_ratio_next_x96
        else:
            assert second.sqrt_ratio_next_x96 >= first.sqrt_ratio_next_x96


class TestComputeSwapStepFailures:
    """Collaborator failures propagate unchanged."""

    def test_fee_at_denominator_divides_by_zero(self):
        """A fee rate of 100% is a caller error surfacing as a division by zero."""
        price = encode_price_sqrt(1, 1)
        target = encode_price_sqrt(101, 100)

        with pytest.raises(DivisionByZero):
            compute_swap_step(price, target, expand_to_18_decimals(2), -(10**18), 1_000_000)

    def test_zero_price_raises(self):
        """A zero sqrt price is rejected by the price math."""
        with pytest.raises(InvalidSqrtPrice):
            compute_swap_step(2**96, 0, 10**18, 10**18, 3000)


class TestSwapStepValue:
    """Tests for the SwapStep value type."""

    def test_unpacks_as_tuple(self):
        """SwapStep unpacks into (next price, in, out, fee)."""
        step = SwapStep(sqrt_ratio_next_x96=5, amount_in=1, amount_out=2, fee_amount=3)

        sqrt_next, amount_in, amount_out, fee_amount = step

        assert (sqrt_next, amount_in, amount_out, fee_amount) == (5, 1, 2, 3)

    def test_is_immutable(self):
        """SwapStep is frozen."""
        step = SwapStep(5, 1, 2, 3)
        with pytest.raises(AttributeError):
            step.amount_in = 10  # type: ignore[misc]
