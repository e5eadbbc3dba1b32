import logging
import os

import numpy as np
import pytest
from sklearn.base import clone
from id3py import ID3Classifier, load_weather


def _weather():
    """Return the weather sample as a DataFrame of features and a label Series."""
    df = load_weather(as_frame=True)
    return df.drop(columns=["Play"]), df["Play"]


def test_classifier_fit_predict_dataframe():
    X, y = _weather()
    clf = ID3Classifier().fit(X, y)
    assert clf.feature_names_ == ["Outlook", "Temperature", "Humidity", "Wind"]
    assert list(clf.classes_) == ["no", "yes"]
    assert clf.n_features_in_ == 4
    preds = clf.predict(X)
    assert preds.shape == y.shape
    assert clf.score(X, y) == 1.0
    assert clf.predict([["sunny", "cool", "high", "strong"]])[0] == "no"


def test_classifier_unknown_label():
    X, y = _weather()
    clf = ID3Classifier(unknown_label="n/a").fit(X, y)
    preds = clf.predict([["foggy", "cool", "high", "strong"],
                         ["overcast", "cool", "high", "strong"]])
    assert list(preds) == ["n/a", "yes"]


def test_classifier_rule_export():
    X, y = _weather()
    clf = ID3Classifier().fit(X, y)
    rules = clf.predict_rule(X)
    assert len(rules) == len(X)
    assert rules[0] == "Outlook = sunny"
    assert rules[5] == "Outlook = rain AND Wind = strong"
    assert clf.predict_rule([["rain", "cool", "high", "calm"]]) == [
        "Outlook = rain AND Wind = calm UNSEEN"]
    tree_rules = clf.export_rules()
    assert tree_rules == [
        "Outlook = overcast => yes",
        "Outlook = rain AND Wind = strong => no",
        "Outlook = rain AND Wind = weak => yes",
        "Outlook = sunny => no",
    ]


def test_classifier_rule_single_leaf():
    X = np.array([["a"], ["b"]], dtype=object)
    y = np.array(["yes", "yes"], dtype=object)
    clf = ID3Classifier().fit(X, y)
    assert clf.depth() == 0
    assert clf.predict_rule(X) == ["<root>", "<root>"]
    assert clf.export_rules() == ["<root> => yes"]


def test_classifier_print_tree(capsys):
    X, y = _weather()
    clf = ID3Classifier().fit(X, y)
    clf.print_tree()
    out = capsys.readouterr().out
    assert out.splitlines()[0] == "Attribute: Outlook"
    assert out.rstrip("\n") == clf.render_tree()
    assert clf.depth() == 2


def test_classifier_graphviz_export():
    pytest.importorskip("graphviz")
    X, y = _weather()
    clf = ID3Classifier().fit(X, y)

    source = clf.export_graphviz()
    assert "Outlook" in source
    assert "Wind" in source
    # dot format should not require the external graphviz binary
    out_path = clf.export_graphviz("test_tree", format="dot")
    assert out_path.endswith(".dot")
    assert os.path.exists(out_path)
    os.remove(out_path)


def test_classifier_not_fitted_raises():
    clf = ID3Classifier()
    with pytest.raises(ValueError):
        clf.predict([["sunny"]])
    with pytest.raises(ValueError):
        clf.predict_rule([["sunny"]])
    with pytest.raises(ValueError):
        clf.export_rules()
    with pytest.raises(ValueError):
        clf.print_tree()


def test_classifier_input_validation():
    X, y = _weather()
    with pytest.raises(ValueError):
        ID3Classifier().fit(X, y[:-1])
    with pytest.raises(ValueError):
        ID3Classifier(feature_names=["a", "b"]).fit(X, y)
    clf = ID3Classifier().fit(X, y)
    with pytest.raises(ValueError):
        clf.predict([["sunny", "cool"]])


def test_classifier_default_feature_names():
    X = np.array([["a", "x"], ["b", "x"]], dtype=object)
    y = np.array(["no", "yes"], dtype=object)
    clf = ID3Classifier().fit(X, y)
    assert clf.feature_names_ == ["f0", "f1"]
    assert clf.render_tree().splitlines()[0] == "Attribute: f0"


def test_classifier_params_roundtrip():
    clf = ID3Classifier(unknown_label="?", verbose=1)
    params = clf.get_params()
    assert params == {"feature_names": None, "unknown_label": "?", "verbose": 1}
    assert clone(clf).unknown_label == "?"


def test_classifier_verbose_logs(caplog):
    X, y = _weather()
    with caplog.at_level(logging.INFO, logger="id3py.tree"):
        ID3Classifier(verbose=1).fit(X, y)
    assert "depth=2" in caplog.text
    assert "leaves=4" in caplog.text


def test_classifier_duplicate_feature_names():
    X = [["c", "p"], ["c", "q"]]
    y = ["yes", "no"]
    with pytest.raises(ValueError):
        ID3Classifier(feature_names=["A", "A"]).fit(X, y)
    with pytest.raises(ValueError):
        ID3Classifier().fit(X, y, feature_names=["A", "A"])


def test_classifier_duplicate_frame_columns():
    pd = pytest.importorskip("pandas")
    X = pd.DataFrame([["c", "p"], ["c", "q"]], columns=["A", "A"])
    with pytest.raises(ValueError):
        ID3Classifier().fit(X, ["yes", "no"])


def test_classifier_numeric_categories():
    X = np.array([[1, "x"], [2, "x"], [1, "y"]], dtype=object)
    y = np.array([0, 1, 0], dtype=object)
    clf = ID3Classifier().fit(X, y)
    assert list(clf.classes_) == [0, 1]
    assert list(clf.predict(X)) == [0, 1, 0]
