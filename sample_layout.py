"""Print the squarified layout of three weighted items on a 100 x 100 square.

Weights 3, 2 and 1 split the square into a top strip for the heaviest
item and two side-by-side tiles underneath.
"""

from squarify_layout import Rect, WeightedRect, score_layout, squarify


def main():
    items = [WeightedRect(weight=3), WeightedRect(weight=2), WeightedRect(weight=1)]
    bounds = Rect(0, 0, 100, 100)

    squarify(items, bounds)

    print("Squarified layout on a 100 x 100 square:\n")
    for item in items:
        print(f"  weight={item.weight}  x={item.x:6.2f}  y={item.y:6.2f}  "
              f"w={item.width:6.2f}  h={item.height:6.2f}  "
              f"area={item.area:8.2f}  AR={item.aspect_ratio:.2f}")

    score = score_layout(items, bounds)
    print(f"\nScore: total={score['total']:.4f} | area={score['area']:.4f} | "
          f"shape={score['shape']:.4f} | coverage={score['coverage']:.4f}")


if __name__ == "__main__":
    main()
