# id3py/__init__.py
"""
id3py: ID3 decision trees for categorical data in pure Python (scikit-learn style).

Exports:
    - ID3Classifier
    - Dataset
    - build_tree, classify, render
    - entropy, information_gain, best_attribute
"""
from .dataset import Dataset
from .tree import (
    UNKNOWN,
    ID3Classifier,
    TreeNode,
    best_attribute,
    build_tree,
    classify,
    entropy,
    information_gain,
    render,
)
from .datasets import load_weather

__all__ = [
    "UNKNOWN",
    "Dataset",
    "ID3Classifier",
    "TreeNode",
    "best_attribute",
    "build_tree",
    "classify",
    "entropy",
    "information_gain",
    "load_weather",
    "render",
]
__version__ = "0.1.0"
