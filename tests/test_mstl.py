import math

import pytest

from loessdecomp.errors import ParameterError, SeriesError
from loessdecomp.mstl import MstlParams, MstlResult, box_cox, decompose
from loessdecomp.stl import StlParams

SERIES = [
    5.0, 9.0, 2.0, 9.0, 0.0, 6.0, 3.0, 8.0, 5.0, 8.0, 7.0, 8.0, 8.0, 0.0, 2.0, 5.0, 0.0,
    5.0, 6.0, 7.0, 3.0, 6.0, 1.0, 4.0, 4.0, 4.0, 3.0, 7.0, 5.0, 8.0,
]

SEASONAL_6 = [
    0.29589650916257176,
    0.7131360245365341,
    -1.9777545147806772,
    2.1624698511020926,
    -2.3451171463413205,
]
SEASONAL_10 = [
    1.4353756018021067,
    1.6273497148046578,
    0.06445418873689807,
    -1.8591810659363182,
    -1.7695663181726196,
]
TREND = [
    5.119031709402748,
    5.206676631219516,
    5.294321553036284,
    5.376592067002382,
    5.458862580968479,
]
REMAINDER = [
    -1.8503038203674267,
    1.4528376294392915,
    -1.3810212269925057,
    3.3201191478318437,
    -1.3441791164545398,
]


def assert_close(expected, actual):
    assert len(expected) == len(actual)
    for e, a in zip(expected, actual):
        assert abs(e - a) < 0.001


def test_works():
    result = decompose(SERIES, [6, 10])
    assert_close(SEASONAL_6, result.seasonal[0][:5])
    assert_close(SEASONAL_10, result.seasonal[1][:5])
    assert_close(TREND, result.trend[:5])
    assert_close(REMAINDER, result.remainder[:5])


def test_unpacked_parts():
    result = decompose(SERIES, [6, 10])
    seasonal, trend, remainder = result.seasonal, result.trend, result.remainder
    assert_close(SEASONAL_6, seasonal[0][:5])
    assert_close(SEASONAL_10, seasonal[1][:5])
    assert_close(TREND, trend[:5])
    assert_close(REMAINDER, remainder[:5])


def test_unsorted_periods():
    result = decompose(SERIES, [10, 6])
    assert_close(SEASONAL_10, result.seasonal[0][:5])
    assert_close(SEASONAL_6, result.seasonal[1][:5])
    assert_close(TREND, result.trend[:5])
    assert_close(REMAINDER, result.remainder[:5])


def test_components_sum_to_series():
    result = decompose(SERIES, [6, 10])
    for i, value in enumerate(SERIES):
        total = result.seasonal[0][i] + result.seasonal[1][i] + result.trend[i] + result.remainder[i]
        assert total == pytest.approx(value)


def test_lambda():
    result = MstlParams(lam=0.5).fit(SERIES, [6, 10])
    assert_close(
        [0.44430562369096716, 0.11285293282005056, -0.7162125659784292,
         1.2348450515667595, -1.8345949154421768],
        result.seasonal[0][:5],
    )
    assert_close(
        [1.0681318097548325, 0.8873143999108631, 0.08834843785509017,
         -1.4177721339186748, -1.1964788702205362],
        result.seasonal[1][:5],
    )
    assert_close(
        [2.0540321512407833, 2.1118216113077026, 2.169611071374622,
         2.2221608300805222, 2.274710588786423],
        result.trend[:5],
    )
    assert_close(
        [-1.0943336296870034, 0.8880110559613836, -0.7133198185050929,
         1.9607662522713927, -1.24363680312371],
        result.remainder[:5],
    )


def test_lambda_zero():
    series = [v + 1.0 for v in SERIES]
    result = MstlParams(lam=0.0).fit(series, [6, 10])
    assert_close(
        [0.19159465027753064, 0.03310720411000314, -0.27095605068498,
         0.4771776113104161, -0.7357826033253875],
        result.seasonal[0][:5],
    )
    assert_close(
        [0.4372710942583092, 0.3305976763779958, -0.012745197414685421,
         -0.5616181209681718, -0.4666170642482943],
        result.seasonal[1][:5],
    )
    assert_close(
        [1.5842742819222766, 1.6073425369662586, 1.6304107920102409,
         1.6514868588310692, 1.6725629256518972],
        result.trend[:5],
    )
    assert_close(
        [-0.4213805572300615, 0.3315376755397885, -0.24809725524246562,
         0.7355387438207321, -0.47016325807821535],
        result.remainder[:5],
    )


def test_lambda_out_of_range():
    with pytest.raises(ParameterError) as info:
        MstlParams(lam=2.0).fit(SERIES, [6, 10])
    assert info.value == ParameterError("lambda must be between 0 and 1")


def test_empty_periods():
    with pytest.raises(ParameterError) as info:
        decompose(SERIES, [])
    assert str(info.value) == "periods must not be empty"


def test_period_one():
    with pytest.raises(ParameterError) as info:
        decompose(SERIES, [1])
    assert str(info.value) == "periods must be at least 2"


def test_too_few_periods():
    with pytest.raises(SeriesError) as info:
        decompose(SERIES, [16])
    assert str(info.value) == "series has less than two periods"


def test_seasonal_lengths_mismatch():
    with pytest.raises(ParameterError) as info:
        MstlParams(seasonal_lengths=[7]).fit(SERIES, [6, 10])
    assert str(info.value) == "seasonal_lengths must have the same length as periods"


def test_seasonal_lengths_match_explicit_stl_length():
    explicit = MstlParams(seasonal_lengths=[7]).fit(SERIES, [7])
    via_stl = MstlParams(stl_params=StlParams(seasonal_length=7)).fit(SERIES, [7])
    assert explicit.seasonal == via_stl.seasonal
    assert explicit.trend == via_stl.trend


def test_seasonal_strength():
    result = MstlParams(stl_params=StlParams(seasonal_length=7)).fit(SERIES, [7])
    assert abs(0.284111676315015 - result.seasonal_strength()[0]) < 0.001


def test_seasonal_strength_max():
    series = [float(v % 7) for v in range(30)]
    result = MstlParams(stl_params=StlParams(seasonal_length=7)).fit(series, [7])
    assert abs(1.0 - result.seasonal_strength()[0]) < 0.001


def test_trend_strength():
    result = MstlParams(stl_params=StlParams(seasonal_length=7)).fit(SERIES, [7])
    assert abs(0.16384245231864702 - result.trend_strength()) < 0.001


def test_trend_strength_max():
    series = [float(v) for v in range(30)]
    result = MstlParams(stl_params=StlParams(seasonal_length=7)).fit(series, [7])
    assert abs(1.0 - result.trend_strength()) < 0.001


def test_seasonal_strength_has_one_value_per_period():
    result = decompose(SERIES, [6, 10])
    strengths = result.seasonal_strength()
    assert len(strengths) == 2
    assert all(0.0 <= s <= 1.0 for s in strengths)


def test_result_strength_on_constructed_components():
    result = MstlResult(
        seasonal=[[1.0, -1.0, 1.0, -1.0]],
        trend=[0.0, 0.0, 0.0, 0.0],
        remainder=[0.0, 0.0, 0.0, 0.0],
    )
    assert result.seasonal_strength() == [1.0]


def test_box_cox_identity_shift_with_lambda_one():
    assert box_cox([1.0, 2.0, -3.0], 1.0) == pytest.approx([0.0, 1.0, -4.0])


def test_box_cox_log_with_lambda_zero():
    assert box_cox([1.0, math.e], 0.0) == pytest.approx([0.0, 1.0])


def test_box_cox_half():
    assert box_cox([4.0, 9.0], 0.5) == pytest.approx([2.0, 4.0])


def test_box_cox_negative_fractional_is_nan():
    values = box_cox([-4.0, 4.0], 0.5)
    assert [math.isnan(v) for v in values] == [True, False]
    assert values[1] == pytest.approx(2.0)