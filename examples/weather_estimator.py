from id3py import ID3Classifier, load_weather

df = load_weather(as_frame=True)
X = df.drop(columns=["Play"])
y = df["Play"]

clf = ID3Classifier(verbose=1).fit(X, y)
clf.print_tree()
for rule in clf.export_rules():
    print(rule)

X_new = [["sunny", "cool", "high", "strong"],
         ["overcast", "mild", "normal", "weak"],
         ["foggy", "mild", "normal", "weak"]]
for x, pred, rule in zip(X_new, clf.predict(X_new), clf.predict_rule(X_new)):
    print(f"{x} -> {pred}  ({rule})")
print(f"training accuracy: {clf.score(X, y):.3f}")

try:
    clf.export_graphviz("weather_tree", format="dot")
except RuntimeError as e:
    print(f"Skipping Graphviz export: {e}")
