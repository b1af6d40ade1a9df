"""Term loading, the sequential batch loop, and the end-to-end job."""
