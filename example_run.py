import logging

from tax_comparison import (
    ComparisonInputs,
    compare,
    income_levels,
    marginal_segments,
    pivot,
    to_dataframe,
)

logging.basicConfig(level=logging.INFO)

inputs = ComparisonInputs(
    income_levels=income_levels(extended=True),  # False for the $100K-$1M range
    jurisdictions=["CT", "NJ", "NY"],
    base="NY",
    surcharge="NYC",
)

df = to_dataframe(compare(inputs))
df.to_csv("example_output.csv", index=False)

print("Effective tax rate (%)")
print(pivot(df, "effective_rate").round(2).to_string())
print()
print("Effective tax amount ($)")
print(pivot(df, "tax").round(0).to_string())
print()

segments = to_dataframe(marginal_segments())
print("Marginal rate segments")
print(segments[["jurisdiction", "rate", "start_income", "end_income", "span"]].to_string(index=False))
