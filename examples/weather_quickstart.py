import logging

from id3py import build_tree, classify, load_weather, render

logging.basicConfig(level=logging.INFO)

dataset = load_weather()
tree = build_tree(dataset)
print(render(tree))

new_instance = ["sunny", "cool", "high", "strong"]
print(f"Classification: {classify(tree, new_instance, dataset.attribute_names)}")
