"""Order-confirmation and delivery-dispatch orchestrator."""
