"""CHIP interpreter core: tokenizer, classifier, driver, positions, transcript."""
