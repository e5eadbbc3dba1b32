# -*- coding: utf-8 -*-
"""
id3py.tree
==========

This module implements Quinlan's ID3 decision tree for purely categorical
data.  Splits are chosen by information gain, every split is multiway (one
child per observed value) and an attribute is used at most once on any
root-to-leaf path.  There is no pruning and no numeric thresholding.

The functional core operates on :class:`~id3py.dataset.Dataset` views:

- :func:`entropy` and :func:`information_gain` score a view,
- :func:`best_attribute` picks the split attribute,
- :func:`build_tree` grows the tree recursively,
- :func:`classify` walks it for a single instance,
- :func:`render` turns it into an indented outline.

:class:`ID3Classifier` wraps the core in a scikit-learn–like API and adds
rule tracing, rule export and Graphviz export.

All tie-breaks are deterministic: candidate attributes are examined in
ascending column order, labels in ascending order and child branches in
ascending value order.
"""

from __future__ import annotations
import logging

import numpy as np
from sklearn.base import BaseEstimator, ClassifierMixin

from .dataset import Dataset, sort_tokens

logger = logging.getLogger(__name__)

UNKNOWN = "Unknown"


# -----------------------------------------------------------------------------
# Entropy / gain
# -----------------------------------------------------------------------------
def entropy(view: Dataset) -> float:
    """Shannon entropy, in bits, of the label distribution of ``view``."""
    n = len(view)
    if n == 0:
        raise ValueError("entropy of an empty dataset is undefined")
    counts = np.array(list(view.class_counts().values()), dtype=float)
    p = counts / n
    # a pure view sums to -0.0
    return float(-np.sum(p * np.log2(p))) + 0.0

def information_gain(view: Dataset, attr_index: int) -> float:
    """Reduction in entropy obtained by partitioning ``view`` on ``attr_index``.

    Mathematically in ``[0, entropy(view)]``; rounding can make it slightly
    negative.
    """
    gain = entropy(view)
    total = len(view)
    for value in view.unique_values(attr_index):
        subset = view.filter(attr_index, value)
        gain -= (len(subset) / total) * entropy(subset)
    return gain

def best_attribute(view: Dataset, candidates) -> int | None:
    """
    Return the candidate column with the highest information gain.

    Candidates are scanned in ascending order and only a strictly greater
    gain replaces the current best, so the lowest index wins ties.

    Parameters
    ----------
    view : Dataset
        Non-empty view to score.
    candidates : iterable of int
        Column indices still available for splitting.

    Returns
    -------
    int or None
        The selected column index, or ``None`` if no candidate was found.
    """
    best_gain, best_attr = -1.0, None
    for attr in sorted(candidates):
        gain = information_gain(view, attr)
        if gain > best_gain:
            best_gain, best_attr = gain, attr
    return best_attr

def majority_label(counts: dict):
    """Most frequent label; the smallest label wins ties."""
    best_label, best_count = None, 0
    for label in sort_tokens(counts):
        if counts[label] > best_count:
            best_label, best_count = label, counts[label]
    return best_label


# -----------------------------------------------------------------------------
# Node
# -----------------------------------------------------------------------------
class TreeNode:
    """Internal representation of a single node in an ID3 tree.

    Attributes
    ----------
    is_leaf : bool
        True if this node is terminal.
    label : str or None
        Predicted label stored at a leaf; ``None`` for internal nodes.
    attribute : str or None
        Name of the attribute split on at this node; ``None`` for leaves.
    children : dict
        Mapping ``{value: TreeNode}`` for internal nodes, in ascending value
        order.  Empty for leaves.
    class_distribution : dict
        Label counts of the training rows that reached this node.
    """

    def __init__(self, *, is_leaf: bool = False, label=None,
                 attribute: str | None = None, class_distribution: dict | None = None):
        self.is_leaf: bool = is_leaf
        self.label = label
        self.attribute: str | None = attribute
        self.children: dict = {}
        self.class_distribution: dict = dict(class_distribution or {})

    def __repr__(self) -> str:
        if self.is_leaf:
            return f"TreeNode(label={self.label!r})"
        return f"TreeNode(attribute={self.attribute!r}, children={list(self.children)})"

    def depth(self) -> int:
        if self.is_leaf:
            return 0
        return 1 + max(child.depth() for child in self.children.values())

    def n_leaves(self) -> int:
        if self.is_leaf:
            return 1
        return sum(child.n_leaves() for child in self.children.values())


# -----------------------------------------------------------------------------
# Builder
# -----------------------------------------------------------------------------
def build_tree(view: Dataset, candidates=None) -> TreeNode:
    """
    Recursively build an ID3 tree from ``view``.

    Parameters
    ----------
    view : Dataset
        Training rows reaching this node.  Must not be empty.
    candidates : iterable of int, optional
        Column indices still available for splitting.  Defaults to every
        non-label column of ``view``.

    Returns
    -------
    TreeNode
        A leaf when the view is pure, no candidates remain or no attribute
        can be selected; otherwise an internal node with one child per value
        of the chosen attribute.

    Raises
    ------
    ValueError
        If ``view`` is empty or a candidate is not a valid attribute column.
    """
    if len(view) == 0:
        raise ValueError("cannot build a tree from an empty dataset")
    if candidates is None:
        candidates = view.attribute_indices()
    candidates = frozenset(int(c) for c in candidates)
    valid = set(view.attribute_indices())
    bad = sorted(candidates - valid)
    if bad:
        raise ValueError(f"invalid candidate attribute columns: {bad}")
    return _build(view, candidates)

def _build(view: Dataset, candidates: frozenset) -> TreeNode:
    counts = view.class_counts()
    if len(counts) == 1:
        return _leaf(next(iter(counts)), counts)
    if not candidates:
        return _leaf(majority_label(counts), counts)

    attr = best_attribute(view, candidates)
    if attr is None:
        return _leaf(majority_label(counts), counts)

    name = view.attribute_name(attr)
    logger.debug("split on %s (%d rows, %d candidates)", name, len(view), len(candidates))
    node = TreeNode(attribute=name, class_distribution=counts)
    remaining = candidates - {attr}
    for value in view.unique_values(attr):
        node.children[value] = _build(view.filter(attr, value), remaining)
    return node

def _leaf(label, counts: dict) -> TreeNode:
    logger.debug("leaf %s %s", label, counts)
    return TreeNode(is_leaf=True, label=label, class_distribution=counts)


# -----------------------------------------------------------------------------
# Classification / presentation
# -----------------------------------------------------------------------------
def classify(tree: TreeNode, instance, attribute_names, unknown=UNKNOWN):
    """
    Predict the label of ``instance`` by walking ``tree``.

    ``instance`` holds one value per attribute, ordered like
    ``attribute_names``.  If a node has no branch for the instance's value
    ``unknown`` is returned.

    Raises
    ------
    ValueError
        If a node's attribute is not in ``attribute_names``, a name is
        repeated or ``instance`` is too short.
    """
    names = list(attribute_names)
    if len(set(names)) != len(names):
        raise ValueError(f"duplicate attribute names: {names}")
    if len(instance) < len(names):
        raise ValueError(
            f"instance has {len(instance)} values, expected {len(names)}")
    node = tree
    while not node.is_leaf:
        try:
            index = names.index(node.attribute)
        except ValueError:
            raise ValueError(f"attribute {node.attribute!r} not in attribute names") from None
        value = instance[index]
        if value not in node.children:
            logger.debug("no branch for %s = %r", node.attribute, value)
            return unknown
        node = node.children[value]
    return node.label

def render(tree: TreeNode) -> str:
    """Indented outline of ``tree``, one line per node."""
    lines = []
    _render_node(tree, "", lines)
    return "\n".join(lines)

def _render_node(node: TreeNode, indent: str, lines: list):
    if node.is_leaf:
        lines.append(f"{indent}Label: {node.label}")
        return
    lines.append(f"{indent}Attribute: {node.attribute}")
    for value, child in node.children.items():
        lines.append(f"{indent}  Value: {value}")
        _render_node(child, indent + "    ", lines)


# -----------------------------------------------------------------------------
# Classifier
# -----------------------------------------------------------------------------
class ID3Classifier(ClassifierMixin, BaseEstimator):
    """
    ID3 decision tree classifier for categorical features.

    The tree is grown to purity (or until attributes run out) by choosing,
    at every node, the attribute with maximal information gain.  Each split
    creates one branch per value seen in the training rows at that node, so
    values unseen during training are predicted as ``unknown_label``.

    Parameters
    ----------
    feature_names : list[str] or None, default=None
        Names of the input features used in rules, printing and Graphviz
        export.  If ``None`` the names come from the DataFrame columns given
        to ``fit`` or default to ``f0, f1, ...``.
    unknown_label : str, default="Unknown"
        Prediction returned when an instance reaches a node with no branch
        for its value.
    verbose : int, default=0
        If positive, a summary of the fitted tree is logged at INFO level.

    Attributes
    ----------
    tree_ : TreeNode
        Root of the fitted tree.
    classes_ : ndarray
        Sorted training labels.
    feature_names_ : list[str]
        Feature names used by the fitted tree.
    n_features_in_ : int
        Number of features seen during ``fit``.

    Notes
    -----
    Inputs are compared by equality, so numeric columns are treated as
    categories.  Bin them beforehand if they have many distinct values.
    """

    def __init__(self, *, feature_names: list[str] | None = None,
                 unknown_label: str = UNKNOWN, verbose: int = 0):
        self.feature_names = feature_names
        self.unknown_label = unknown_label
        self.verbose = verbose

    def fit(self, X, y, feature_names=None):
        names = feature_names if feature_names is not None else self.feature_names
        if names is None and hasattr(X, "columns"):
            names = [str(c) for c in X.columns]
        X = np.asarray(X, dtype=object)
        y = np.asarray(y, dtype=object)
        if X.ndim != 2:
            raise ValueError("X must be a 2-D array")
        if len(X) != len(y):
            raise ValueError("X and y must have the same number of rows")
        n_features = X.shape[1]
        if names is None:
            names = [f"f{i}" for i in range(n_features)]
        if len(names) != n_features:
            raise ValueError("feature_names length must match X.shape[1]")
        if len(set(names)) != len(names):
            raise ValueError(f"duplicate feature names: {list(names)}")
        self.feature_names_ = list(names)
        self.n_features_in_ = n_features

        table = np.column_stack([X, y])
        dataset = Dataset(table, self.feature_names_, n_features)
        self.classes_ = np.array(sort_tokens(set(y.tolist())), dtype=object)
        self.tree_ = build_tree(dataset)
        if self.verbose > 0:
            logger.info("fitted ID3 tree on %d rows: depth=%d, leaves=%d",
                        len(dataset), self.tree_.depth(), self.tree_.n_leaves())
        return self

    def predict(self, X):
        """
        Predict labels for the provided samples.

        Parameters
        ----------
        X : array-like of shape (n_samples, n_features)
            Categorical input samples.

        Returns
        -------
        ndarray of shape (n_samples,)
            Predicted labels, with ``unknown_label`` where the tree has no
            branch for a value.
        """
        self._check_fitted()
        X = self._check_X(X)
        return np.array([classify(self.tree_, x, self.feature_names_, self.unknown_label)
                         for x in X], dtype=object)

    def predict_rule(self, X):
        """Return the antecedent followed by each input instance."""
        self._check_fitted()
        X = self._check_X(X)
        return [self._trace_rule(x) for x in X]

    def export_rules(self):
        """Every root-to-leaf path as ``"<antecedent> => <label>"``."""
        self._check_fitted()
        rules = []
        self._collect_rules(self.tree_, [], rules)
        return rules

    def render_tree(self) -> str:
        self._check_fitted()
        return render(self.tree_)

    def print_tree(self):
        """Pretty-print the fitted tree to ``stdout``."""
        print(self.render_tree())

    def depth(self) -> int:
        self._check_fitted()
        return self.tree_.depth()

    def export_graphviz(self, filename=None, format="png"):
        """
        Export the fitted tree with Graphviz.

        Parameters
        ----------
        filename : str or None, default=None
            Basename of the output file.  If None, the DOT source is returned
            and nothing is written.
        format : str, default="png"
            Output format.  ``'dot'`` writes the DOT source directly without
            calling the external ``dot`` binary.

        Returns
        -------
        str
            Path to the written file, or the DOT source if filename is None.

        Raises
        ------
        ValueError
            If the estimator is not fitted.
        RuntimeError
            If the ``graphviz`` package is not installed.
        """
        self._check_fitted()
        try:
            import graphviz
        except ImportError:
            raise RuntimeError("Graphviz is required for export_graphviz but not installed.")
        dot = graphviz.Digraph(format=format)
        self._add_graph_nodes(dot, self.tree_, "0")

        if filename is None:
            return dot.source
        if format.lower() == "dot":
            path = f"{filename}.dot"
            dot.save(path)
            return path
        try:
            dot.render(filename, cleanup=True)
            return f"{filename}.{format}"
        except graphviz.ExecutableNotFound:
            # no dot binary; fall back to the source
            fallback_path = f"{filename}.dot"
            dot.save(fallback_path)
            return fallback_path

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _check_fitted(self):
        if getattr(self, "tree_", None) is None:
            raise ValueError("Estimator not fitted. Call fit(...) first.")

    def _check_X(self, X):
        X = np.asarray(X, dtype=object)
        if X.ndim == 1:
            X = X.reshape(1, -1)
        if X.shape[1] != self.n_features_in_:
            raise ValueError(
                f"X has {X.shape[1]} features, expected {self.n_features_in_}")
        return X

    def _trace_rule(self, x):
        parts = []
        node = self.tree_
        while not node.is_leaf:
            value = x[self.feature_names_.index(node.attribute)]
            if value not in node.children:
                parts.append(f"{node.attribute} = {value} UNSEEN")
                break
            parts.append(f"{node.attribute} = {value}")
            node = node.children[value]
        return " AND ".join(parts) if parts else "<root>"

    def _collect_rules(self, node: TreeNode, parts, rules):
        if node.is_leaf:
            body = " AND ".join(parts) if parts else "<root>"
            rules.append(f"{body} => {node.label}")
            return
        for value, child in node.children.items():
            self._collect_rules(child, parts + [f"{node.attribute} = {value}"], rules)

    def _add_graph_nodes(self, dot, node: TreeNode, name: str):
        if node.is_leaf:
            dot.node(name, f"{node.label}\n{node.class_distribution}",
                     shape="box", style="filled", color="lightgrey")
            return
        dot.node(name, node.attribute, shape="ellipse", style="filled", color="lightblue")
        for i, (value, child) in enumerate(node.children.items()):
            child_id = f"{name}_{i}"
            self._add_graph_nodes(dot, child, child_id)
            dot.edge(name, child_id, label=str(value))
