import math
from dataclasses import fields

import pytest

torch = pytest.importorskip("torch")

from multiplication_net.data import TARGET_SCALE, make_dataset
from multiplication_net.network import (
    HIDDEN_SHAPE,
    OUTPUT_SHAPE,
    NetworkWeights,
    apply_gradients,
    backward,
    forward,
    init_weights,
    predict,
    scale_output,
)
from multiplication_net.utils.math_utils import ShapeMismatchError, matmul


def _weights(seed: int = 0) -> NetworkWeights:
    return init_weights(generator=torch.Generator().manual_seed(seed))


def test_dataset_is_row_major_multiplication_table() -> None:
    dataset = make_dataset()
    assert len(dataset) == 9
    assert dataset.inputs.shape == (9, 2)
    assert dataset.inputs[5].tolist() == [2.0, 3.0]
    assert dataset.products.flatten().tolist() == [1, 2, 3, 2, 4, 6, 3, 6, 9]
    assert torch.allclose(dataset.targets * TARGET_SCALE, dataset.products.to(torch.float64))
    assert dataset.targets.min().item() == pytest.approx(0.1)
    assert dataset.targets.max().item() == pytest.approx(0.9)
    assert torch.all(dataset.targets < 1.0)


def test_init_weights_shapes_and_range() -> None:
    weights = _weights()
    assert tuple(weights.hidden.shape) == HIDDEN_SHAPE
    assert tuple(weights.output.shape) == OUTPUT_SHAPE
    for matrix in (weights.hidden, weights.output):
        assert torch.all(matrix >= -1.0)
        assert torch.all(matrix < 1.0)


def test_forward_shapes() -> None:
    dataset = make_dataset()
    cache = forward(_weights(), dataset.inputs)
    assert cache.hidden_pre.shape == (9, 3)
    assert cache.hidden_act.shape == (9, 3)
    assert cache.output_pre.shape == (9, 1)
    assert cache.output.shape == (9, 1)


def test_forward_is_idempotent() -> None:
    dataset = make_dataset()
    weights = _weights(3)
    first = forward(weights, dataset.inputs)
    second = forward(weights, dataset.inputs)
    assert torch.equal(first.output, second.output)
    assert torch.equal(first.hidden_act, second.hidden_act)


def test_backward_steps_match_weight_shapes() -> None:
    dataset = make_dataset()
    weights = _weights(1)
    cache = forward(weights, dataset.inputs)
    grads = backward(weights, dataset.inputs, dataset.targets, cache)
    assert tuple(grads.hidden.shape) == HIDDEN_SHAPE
    assert tuple(grads.output.shape) == OUTPUT_SHAPE
    assert {f.name for f in fields(grads)} == {"hidden", "output"}


def test_apply_gradients_updates_in_place() -> None:
    dataset = make_dataset()
    weights = _weights(2)
    hidden_ref = weights.hidden
    before = weights.clone()
    cache = forward(weights, dataset.inputs)
    grads = backward(weights, dataset.inputs, dataset.targets, cache)
    apply_gradients(weights, grads, 0.5)
    assert weights.hidden is hidden_ref
    assert torch.allclose(weights.hidden, before.hidden + 0.5 * grads.hidden)
    assert torch.allclose(weights.output, before.output + 0.5 * grads.output)


def test_weights_reject_wrong_shape() -> None:
    with pytest.raises(ShapeMismatchError, match="hidden weights"):
        NetworkWeights(hidden=torch.zeros(2, 3), output=torch.zeros(1, 3))


def test_matmul_reports_operation_and_dimensions() -> None:
    with pytest.raises(ShapeMismatchError) as excinfo:
        matmul(torch.zeros(9, 2), torch.zeros(3, 2), op="hidden_pre")
    message = str(excinfo.value)
    assert message.startswith("hidden_pre:")
    assert "[9×2]" in message
    assert "[3×2]" in message


def test_forward_rejects_wrong_input_width() -> None:
    with pytest.raises(ShapeMismatchError, match="hidden_pre"):
        forward(_weights(), torch.ones(9, 3, dtype=torch.float64))


def test_backward_rejects_flat_targets() -> None:
    dataset = make_dataset()
    weights = _weights()
    cache = forward(weights, dataset.inputs)
    with pytest.raises(ShapeMismatchError, match="targets"):
        backward(weights, dataset.inputs, dataset.targets.flatten(), cache)


def test_scale_output_rounds_to_nearest_product() -> None:
    output = torch.tensor([[0.6], [1.4], [2.6], [8.7]], dtype=torch.float64)
    output = output / TARGET_SCALE
    assert scale_output(output).flatten().tolist() == [1, 1, 3, 9]
    assert scale_output(output).dtype == torch.long


def test_predict_on_constructed_network() -> None:
    # A single hidden unit sees a + b; the output weights are solved so that
    # (1, 1) maps to the target of 1 and (2, 3) to the target of 6.
    h_low = 1.0 / (1.0 + math.exp(-2.0))
    h_high = 1.0 / (1.0 + math.exp(-5.0))
    low, high = 1.0 / TARGET_SCALE, 6.0 / TARGET_SCALE
    z_low = math.log(low / (1.0 - low))
    z_high = math.log(high / (1.0 - high))
    slope = (z_high - z_low) / (h_high - h_low)
    offset = z_low - slope * h_low
    weights = NetworkWeights(
        hidden=torch.tensor([[1.0, 1.0], [0.0, 0.0], [0.0, 0.0]], dtype=torch.float64),
        output=torch.tensor([[slope, offset, offset]], dtype=torch.float64),
    )
    inputs = torch.tensor([[1.0, 1.0], [2.0, 3.0]], dtype=torch.float64)
    assert predict(weights, inputs).flatten().tolist() == [1, 6]
