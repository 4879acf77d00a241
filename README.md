# scratchnet

A small, dependency-free feed-forward neural network written with plain
Python lists. It provides dense layers with sigmoid or ReLU activations,
mean squared error and cross-entropy losses, the SGD, Momentum and Adam
optimizers, and helpers for loading, normalising and splitting the Iris
dataset.

## Building blocks

| Module | Contents |
| --- | --- |
| `scratchnet.activations` | `sigmoid`, `relu`, their element-wise forms `sigmoid_all` / `relu_all`, and `sigmoid_derivative`, `sigmoid_derivative_from_input`, `relu_derivative` |
| `scratchnet.losses` | `mean_squared_error`, `cross_entropy` and their `_derivative` functions |
| `scratchnet.optimizers` | `Optimizer` base class, `SGD`, `Momentum`, `Adam` |
| `scratchnet.layer` | `Layer`, a fully connected layer with forward and backward passes |
| `scratchnet.network` | `NeuralNetwork`, which stacks layers, trains and evaluates |
| `scratchnet.data_loader` | `Dataset`, Iris loading and download, feature normalisation, splits, one-hot encoding |

## Learning XOR

```python
from scratchnet.network import NeuralNetwork

net = NeuralNetwork([2, 8, 1], "sigmoid", "crossEntropy", "Adam", seed=1234)

inputs = [[0.0, 0.0], [0.0, 1.0], [1.0, 0.0], [1.0, 1.0]]
targets = [[0.0], [1.0], [1.0], [0.0]]

history = net.train(inputs, targets, epochs=2000, learning_rate=0.2)

print(history[-1])                     # mean loss of the last epoch
print(net.evaluate(inputs, targets))   # fraction of correct samples
print(net.predict([1.0, 0.0]))         # a single output close to 1
```

The activation is `"sigmoid"` or `"relu"`, the loss is `"crossEntropy"` or
`"meanSquaredError"`, and the optimizer is `"SGD"`, `"Momentum"` (momentum
0.9) or `"Adam"` (0.9, 0.999, 1e-8). An unknown name raises `ValueError`.
A non-zero `seed` makes weight initialisation reproducible (layer *i* is
seeded with `seed + i`); a seed of `0` draws fresh randomness.

`NeuralNetwork()` with no arguments starts empty; add layers with
`add_layer`. Loss and optimizer may be left unset, but `train` then raises
`RuntimeError`. `train` and `evaluate` raise `ValueError` when the number of
inputs and targets differ.

`train` updates the network one sample at a time and returns the mean loss
of every epoch. Every 100th epoch's loss is also written to the
`scratchnet.network` logger at INFO level.

`evaluate` scores each sample according to its target: one-hot targets are
compared by the index of the largest output, single 0/1 targets by a 0.5
threshold, other single targets and anything else by checking every output
lies within `tolerance` (default `0.01`) of its target. With no samples it
returns `nan`.

## Classifying Iris

```python
from scratchnet import data_loader
from scratchnet.network import NeuralNetwork

dataset = data_loader.load_iris_dataset()          # reads data/iris.csv
data_loader.normalize_features(dataset.inputs)     # zero mean, unit deviation, in place

train, validation, test = data_loader.train_validation_test_split(
    dataset, 0.6, 0.2, 0.2, seed=42
)

net = NeuralNetwork([4, 16, 8, 3], "sigmoid", "crossEntropy", "Adam", seed=1234)
net.train(train.inputs, train.targets, epochs=50, learning_rate=0.01)
print(net.evaluate(validation.inputs, validation.targets))
```

`load_iris_from_csv(filename)` reads rows of four numeric features followed
by a species name, collects the class names in sorted order and one-hot
encodes the targets. Rows that lack four parseable features or a class name
are skipped. If the file does not exist, `download_iris_dataset(filename)`
fetches the UCI Iris data over HTTP (creating parent directories) and
returns whether it succeeded; if that fails, `FileNotFoundError` is raised.
A file from which no rows load raises `ValueError`.

A `Dataset` holds `inputs`, `targets`, `feature_names` and `class_names`.
`train_validation_test_split` raises `ValueError` unless the three ratios sum
to 1. `train_test_split(dataset, test_ratio=0.2, seed=0)` returns a
`(train, test)` pair. Splits copy the rows and keep the names.
`normalize_features` leaves columns with (almost) no spread unchanged.
`one_hot_encode([0, 2, 1], 3)` turns integer labels into one-hot rows,
leaving out-of-range labels as all zeros.

Progress messages from loading and splitting go to the
`scratchnet.data_loader` logger.

## Using the pieces directly

```python
from scratchnet.activations import sigmoid, sigmoid_derivative
from scratchnet.layer import Layer
from scratchnet.optimizers import Adam

layer = Layer(2, 3, sigmoid, sigmoid_derivative, seed=7)
out = layer.forward([0.5, -0.3])
grads_in = layer.backward([0.1, -0.05, 0.2])

opt = Adam()
opt.update_weights(layer.weights, layer.compute_weight_gradients([0.1, -0.05, 0.2]), 0.01)
opt.update_biases(layer.biases, layer.compute_bias_gradients([0.1, -0.05, 0.2]), 0.01)
```

A `Layer` defaults to sigmoid. Its activation derivative is applied to the
layer's outputs, not its raw inputs. `backward` stores `weight_gradients`
and `bias_gradients` on the layer and returns the gradient for the inputs;
the `compute_*` methods return gradients without storing them. Calling them
before `forward` raises `RuntimeError`.

Optimizers update weight matrices and bias vectors in place and keep their
own state (velocities or moment estimates) for each parameter list between
calls. Adam advances its time step once per `update_weights` call.

## What it does not do

There is no command-line program, no model saving or loading, and no
mini-batching or vectorised math: everything runs sample by sample on
Python lists.